"""civicfix CLI commands for municipal issue tracking."""

from __future__ import annotations

import typer

from ._helpers import SortedGroup

app = typer.Typer(
    help="civicfix - report, triage, assign and archive municipal issues",
    no_args_is_help=True,
    cls=SortedGroup,
)


@app.callback(invoke_without_command=True)
def _global_options(
    ctx: typer.Context,
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON for all commands",
    ),
) -> None:
    from ._json_state import set_json_flag

    set_json_flag(json_output)
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)


from . import (  # noqa: E402
    _cmd_archive,
    _cmd_departments,
    _cmd_init,
    _cmd_issues,
    _cmd_web,
)

for _mod in (
    _cmd_archive,
    _cmd_departments,
    _cmd_init,
    _cmd_issues,
    _cmd_web,
):
    _mod.register(app)


def main() -> None:
    """Run the civicfix CLI application."""
    app()
