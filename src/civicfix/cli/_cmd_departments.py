"""Department listing for the civicfix CLI."""

from __future__ import annotations

import typer

from civicfix.models import department_to_dict

from ._formatting import format_department
from ._helpers import DATA_DIR_HELP, get_workspace
from ._json_state import echo_json, is_json_output


def register(app: typer.Typer) -> None:
    """Register the departments command."""

    @app.command()
    def departments(
        json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
        data_dir: str | None = typer.Option(None, help=DATA_DIR_HELP),
    ) -> None:
        """List the departments issues can be assigned to."""
        workspace = get_workspace(data_dir)
        items = workspace.departments.list()

        if is_json_output(json_output):
            echo_json([department_to_dict(d) for d in items])
            return

        if not items:
            typer.echo("No departments defined.")
            return

        for department in items:
            typer.echo(format_department(department))
