"""Display and formatting functions for the civicfix CLI."""

from __future__ import annotations

from typing import TYPE_CHECKING

import typer

from civicfix.constants import PRIORITY_COLORS, STATUS_COLORS, STATUS_SYMBOLS

if TYPE_CHECKING:
    from civicfix.models import Department, Issue


def format_issue_brief(issue: Issue) -> str:
    """Format an issue as a single colored line.

    Returns:
        Status symbol, priority, ID, title and type, plus the department
        when assigned
    """
    symbol = STATUS_SYMBOLS.get(issue.status, "?")
    status_str = typer.style(
        f"{symbol} {issue.status}",
        fg=STATUS_COLORS.get(issue.status, "white"),
    )
    priority_str = typer.style(
        f"[{issue.priority}]",
        fg=PRIORITY_COLORS.get(issue.priority, "white"),
        bold=True,
    )
    type_str = typer.style(f"[{issue.issue_type or '-'}]", fg="cyan")
    department_str = ""
    if issue.department:
        department_str = " " + typer.style(f"→ {issue.department}", fg="bright_black")
    title = issue.title or "(untitled)"
    return f"{status_str} {priority_str} {issue.id}: {title} {type_str}{department_str}"


def format_issue_table(issues: list[Issue]) -> str:
    """Format issues as a Rich table.

    Returns:
        Rendered table, or an empty string when there are no issues
    """
    from io import StringIO

    from rich import box
    from rich.console import Console
    from rich.table import Table

    if not issues:
        return ""

    table = Table(
        show_header=True,
        header_style="bold",
        box=box.ROUNDED,
        pad_edge=False,
        show_edge=False,
    )
    table.add_column("", width=2, no_wrap=True)
    table.add_column("ID", no_wrap=True)
    table.add_column("Status", no_wrap=True)
    table.add_column("Pri", no_wrap=True)
    table.add_column("Type", no_wrap=True)
    table.add_column("Department", no_wrap=True)
    table.add_column("Title", overflow="fold")

    for issue in issues:
        status_color = STATUS_COLORS.get(issue.status, "white")
        table.add_row(
            STATUS_SYMBOLS.get(issue.status, "?"),
            issue.id,
            f"[{status_color}]{issue.status}[/]",
            f"[bold {PRIORITY_COLORS.get(issue.priority, 'white')}]"
            f"{issue.priority}[/]",
            issue.issue_type or "",
            issue.department or "",
            issue.title or "",
        )

    buffer = StringIO()
    Console(file=buffer, force_terminal=False, width=120).print(table)
    return buffer.getvalue().rstrip("\n")


def format_issue_details(issue: Issue) -> str:
    """Format every field of an issue for ``cfix show``."""
    lines = [
        format_issue_brief(issue),
        "",
        f"Reported by: {issue.reported_by} at {issue.reported_at}",
        f"Location:    {issue.location or '-'}",
    ]
    if issue.coordinates:
        lat = issue.coordinates.get("lat")
        lng = issue.coordinates.get("lng")
        lines.append(f"Coordinates: {lat}, {lng}")
    if issue.is_assigned():
        lines.append(
            f"Assigned:    {issue.department or '-'} / {issue.assigned_to or '-'}"
            f" at {issue.assigned_at}",
        )
    if issue.description:
        lines.extend(["", issue.description])
    if issue.media:
        lines.append("")
        lines.append(f"Media ({len(issue.media)}):")
        for item in issue.media:
            url = item.get("url") if isinstance(item, dict) else item
            lines.append(f"  - {url}")
    if issue.voice_note:
        lines.append("Voice note: attached")
    if issue.updates:
        lines.append("")
        lines.append("Updates:")
        for update in issue.updates:
            lines.append(f"  {update.date} {update.by}: {update.note}")
    return "\n".join(lines)


def format_department(department: Department) -> str:
    """Format a department as ``id  name``."""
    return f"{typer.style(department.id, bold=True)}  {department.name}"
