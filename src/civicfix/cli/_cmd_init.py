"""Initialization command for the civicfix CLI."""

from __future__ import annotations

import typer

from civicfix.config import load_config, save_config
from civicfix.errors import PersistenceError
from civicfix.workspace import init_workspace

from ._helpers import DATA_DIR_HELP, resolve_data_dir
from ._json_state import echo_error, echo_json, is_json_output


def register(app: typer.Typer) -> None:
    """Register the init command."""

    @app.command()
    def init(
        reporter_label: str | None = typer.Option(
            None,
            "--reporter-label",
            help="reportedBy value used when a reporter is not named",
        ),
        authority_label: str | None = typer.Option(
            None,
            "--authority-label",
            help="Author of notes added on assignment",
        ),
        json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
        data_dir: str | None = typer.Option(None, help=DATA_DIR_HELP),
    ) -> None:
        """Initialize a data directory.

        Creates the issues, departments and archive collections when they are
        missing. Departments are seeded only the first time. Running init on
        an existing data directory changes nothing except the given labels.
        """
        resolved = resolve_data_dir(data_dir)
        try:
            workspace, created = init_workspace(resolved)
        except (PersistenceError, OSError) as e:
            echo_error(str(e))
            raise typer.Exit(1) from e

        overrides = {
            "reporter_label": reporter_label,
            "authority_label": authority_label,
        }
        overrides = {k: v for k, v in overrides.items() if v is not None}
        if overrides:
            config = load_config(workspace.data_dir)
            config.update(overrides)
            save_config(workspace.data_dir, config)

        if is_json_output(json_output):
            echo_json({"data_dir": str(workspace.data_dir), "created": created})
            return

        typer.echo(f"✓ civicfix data directory initialized at {workspace.data_dir}")
        for name in created:
            typer.echo(f"  created {name}.json")
        if not created:
            typer.echo("  all collections already present")
