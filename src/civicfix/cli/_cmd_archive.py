"""Archive commands for the civicfix CLI."""

from __future__ import annotations

import typer

from civicfix.errors import PersistenceError
from civicfix.models import issue_to_dict

from ._formatting import format_issue_brief
from ._helpers import DATA_DIR_HELP, get_workspace
from ._json_state import echo_error, echo_json, is_json_output


def register(app: typer.Typer) -> None:
    """Register archive commands."""

    @app.command("clear-resolved")
    def clear_resolved(
        dry_run: bool = typer.Option(
            False,
            "--dry-run",
            help="Preview what would be archived without making changes",
        ),
        yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation prompt"),
        json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
        data_dir: str | None = typer.Option(None, help=DATA_DIR_HELP),
    ) -> None:
        """Move every resolved issue to the archive.

        Examples:
            cfix clear-resolved --dry-run   # Preview
            cfix clear-resolved --yes       # Skip confirmation prompt
        """
        workspace = get_workspace(data_dir)
        resolved = [i for i in workspace.issues.list_all() if i.is_resolved()]

        if dry_run:
            if is_json_output(json_output):
                echo_json({"would_remove": [i.id for i in resolved]})
                return
            if not resolved:
                typer.echo("No resolved issues to archive.")
                return
            typer.echo(f"Would archive {len(resolved)} issue(s):")
            for issue in resolved:
                typer.echo(f"  {format_issue_brief(issue)}")
            typer.echo("\n(dry run - no changes made)")
            return

        if resolved and not yes and not is_json_output(json_output):
            proceed = typer.confirm(
                f"Archive {len(resolved)} resolved issue(s)?",
                default=False,
            )
            if not proceed:
                typer.echo("Aborted.")
                return

        try:
            result = workspace.archive.clear_resolved()
        except PersistenceError as e:
            echo_error(str(e))
            raise typer.Exit(1) from e

        if is_json_output(json_output):
            echo_json({"removed": result.removed, "remaining": result.remaining})
        else:
            typer.echo(
                f"✓ Archived {result.removed} resolved issue(s), "
                f"{result.remaining} remaining",
            )

    @app.command()
    def archived(
        limit: int | None = typer.Option(
            None,
            "--limit",
            "-n",
            help="Show only the N most recently archived issues",
        ),
        json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
        data_dir: str | None = typer.Option(None, help=DATA_DIR_HELP),
    ) -> None:
        """List archived issues."""
        workspace = get_workspace(data_dir)
        issues = workspace.archive.list_archived()
        if limit is not None:
            issues = issues[-limit:] if limit > 0 else []

        if is_json_output(json_output):
            echo_json([issue_to_dict(i) for i in issues])
            return

        if not issues:
            typer.echo("Archive is empty.")
            return

        for issue in issues:
            stamp = typer.style(f"[archived {issue.archived_at}]", fg="bright_black")
            typer.echo(f"{format_issue_brief(issue)} {stamp}")
