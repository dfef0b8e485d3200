"""Issue commands for the civicfix CLI."""

from __future__ import annotations

from typing import Any

import typer

from civicfix.errors import IssueNotFoundError, PersistenceError
from civicfix.models import Priority, Status, issue_to_dict

from ._formatting import format_issue_brief, format_issue_details, format_issue_table
from ._helpers import DATA_DIR_HELP, get_workspace
from ._json_state import echo_error, echo_json, is_json_output

_STATUS_VALUES = ", ".join(s.value for s in Status)
_PRIORITY_VALUES = ", ".join(p.value for p in Priority)


def register(app: typer.Typer) -> None:
    """Register issue commands."""

    @app.command()
    def report(
        title: str = typer.Argument(..., help="Short title of the issue"),
        issue_type: str | None = typer.Option(
            None,
            "--type",
            "-t",
            help="Kind of issue (e.g. pothole, streetlight)",
        ),
        description: str | None = typer.Option(
            None,
            "--description",
            "-d",
            help="What is wrong",
        ),
        location: str | None = typer.Option(None, "--location", "-l", help="Address"),
        lat: float | None = typer.Option(None, "--lat", help="Latitude"),
        lng: float | None = typer.Option(None, "--lng", help="Longitude"),
        priority: str | None = typer.Option(
            None,
            "--priority",
            "-p",
            help=f"Priority ({_PRIORITY_VALUES})",
        ),
        reported_by: str | None = typer.Option(
            None,
            "--by",
            help="Reporter name (default: configured reporter label)",
        ),
        json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
        data_dir: str | None = typer.Option(None, help=DATA_DIR_HELP),
    ) -> None:
        """Report a new issue."""
        data: dict[str, Any] = {
            "type": issue_type,
            "title": title,
            "description": description,
            "location": location,
            "priority": priority,
            "reportedBy": reported_by,
        }
        if lat is not None and lng is not None:
            data["coordinates"] = {"lat": lat, "lng": lng}
        elif lat is not None or lng is not None:
            echo_error("--lat and --lng must be given together")
            raise typer.Exit(1)

        workspace = get_workspace(data_dir)
        try:
            issue = workspace.issues.create(data)
        except PersistenceError as e:
            echo_error(str(e))
            raise typer.Exit(1) from e

        if is_json_output(json_output):
            echo_json(issue_to_dict(issue))
        else:
            typer.echo(f"✓ Reported {issue.id}: {issue.title}")

    @app.command("list")
    def list_issues(
        status: str | None = typer.Option(
            None,
            "--status",
            "-s",
            help=f"Only issues with this status ({_STATUS_VALUES})",
        ),
        department: str | None = typer.Option(
            None,
            "--department",
            help="Only issues assigned to this department",
        ),
        table: bool = typer.Option(False, "--table", help="Show as a table"),
        json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
        data_dir: str | None = typer.Option(None, help=DATA_DIR_HELP),
    ) -> None:
        """List active issues, oldest report first."""
        workspace = get_workspace(data_dir)
        issues = workspace.issues.list_all()
        if status is not None:
            issues = [i for i in issues if i.status == status]
        if department is not None:
            issues = [i for i in issues if i.department == department]

        if is_json_output(json_output):
            echo_json([issue_to_dict(i) for i in issues])
            return

        if not issues:
            typer.echo("No issues found.")
            return

        if table:
            typer.echo(format_issue_table(issues))
        else:
            for issue in issues:
                typer.echo(format_issue_brief(issue))

    @app.command()
    def show(
        issue_id: str = typer.Argument(..., help="Issue ID"),
        json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
        data_dir: str | None = typer.Option(None, help=DATA_DIR_HELP),
    ) -> None:
        """Show every field of an issue."""
        workspace = get_workspace(data_dir)
        try:
            issue = workspace.issues.get(issue_id)
        except IssueNotFoundError as e:
            echo_error(str(e))
            raise typer.Exit(1) from e

        if is_json_output(json_output):
            echo_json(issue_to_dict(issue))
        else:
            typer.echo(format_issue_details(issue))

    @app.command()
    def status(
        issue_id: str = typer.Argument(..., help="Issue ID"),
        new_status: str = typer.Argument(..., help=f"New status ({_STATUS_VALUES})"),
        json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
        data_dir: str | None = typer.Option(None, help=DATA_DIR_HELP),
    ) -> None:
        """Set the status of an issue.

        Any status may follow any other; values outside the usual set are
        stored as given.
        """
        workspace = get_workspace(data_dir)
        try:
            issue = workspace.issues.update_status(issue_id, new_status)
        except (IssueNotFoundError, PersistenceError) as e:
            echo_error(str(e))
            raise typer.Exit(1) from e

        if is_json_output(json_output):
            echo_json(issue_to_dict(issue))
        else:
            typer.echo(f"✓ {issue.id} is now {issue.status}")

    @app.command()
    def assign(
        issue_id: str = typer.Argument(..., help="Issue ID"),
        department: str | None = typer.Option(
            None,
            "--department",
            "-D",
            help="Department ID (see 'cfix departments')",
        ),
        assigned_to: str | None = typer.Option(
            None,
            "--to",
            help="Person or crew responsible",
        ),
        priority: str | None = typer.Option(
            None,
            "--priority",
            "-p",
            help=f"New priority ({_PRIORITY_VALUES})",
        ),
        instructions: str | None = typer.Option(
            None,
            "--instructions",
            "-i",
            help="Note appended to the issue's updates",
        ),
        json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
        data_dir: str | None = typer.Option(None, help=DATA_DIR_HELP),
    ) -> None:
        """Assign an issue. A pending issue moves to in-progress."""
        workspace = get_workspace(data_dir)
        if department is not None and workspace.departments.get(department) is None:
            echo_error(f"Unknown department: {department}")
            raise typer.Exit(1)

        try:
            issue = workspace.issues.assign(
                issue_id,
                department=department,
                assigned_to=assigned_to,
                priority=priority,
                instructions=instructions,
            )
        except (IssueNotFoundError, PersistenceError) as e:
            echo_error(str(e))
            raise typer.Exit(1) from e

        if is_json_output(json_output):
            echo_json(issue_to_dict(issue))
        else:
            typer.echo(f"✓ Assigned {issue.id}")
            typer.echo(f"  {format_issue_brief(issue)}")

    @app.command()
    def delete(
        issue_id: str = typer.Argument(..., help="Issue ID"),
        yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation prompt"),
        json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
        data_dir: str | None = typer.Option(None, help=DATA_DIR_HELP),
    ) -> None:
        """Remove an issue from the active list. It is kept in the archive."""
        workspace = get_workspace(data_dir)
        if not yes and not is_json_output(json_output):
            proceed = typer.confirm(f"Delete {issue_id}?", default=False)
            if not proceed:
                typer.echo("Aborted.")
                return

        try:
            removed = workspace.issues.delete(issue_id)
        except (IssueNotFoundError, PersistenceError) as e:
            echo_error(str(e))
            raise typer.Exit(1) from e

        if is_json_output(json_output):
            echo_json({"ok": True, "id": removed.id})
        else:
            typer.echo(f"✓ Deleted {removed.id} (archived)")
