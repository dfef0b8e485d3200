"""Web server command for the civicfix CLI."""

from __future__ import annotations

import typer

from ._helpers import DATA_DIR_HELP, resolve_data_dir


def register(app: typer.Typer) -> None:
    """Register the serve command."""

    @app.command()
    def serve(
        host: str | None = typer.Option(
            None,
            help="Host to bind to (default: from config, else 127.0.0.1)",
        ),
        port: int | None = typer.Option(
            None,
            help="Port to listen on (default: from config, else 3000)",
        ),
        log_level: str = typer.Option("info", help="uvicorn log level"),
        data_dir: str | None = typer.Option(None, help=DATA_DIR_HELP),
    ) -> None:
        """Serve the issue API over HTTP.

        The data directory is created and seeded on startup if needed.
        """
        import uvicorn

        from civicfix.config import get_setting
        from civicfix.web import create_app

        resolved = resolve_data_dir(data_dir)
        fastapi_app = create_app(data_dir=resolved)

        bind_host = host or get_setting(resolved, "host")
        bind_port = port or get_setting(resolved, "port")

        typer.echo(f"civicfix API → http://{bind_host}:{bind_port}/api/issues")
        uvicorn.run(fastapi_app, host=bind_host, port=bind_port, log_level=log_level)
