"""Shared infrastructure for civicfix CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import typer
from typer.core import TyperGroup

from civicfix.config import find_data_dir
from civicfix.workspace import Workspace, open_workspace

from ._json_state import echo_error

if TYPE_CHECKING:
    import click

DATA_DIR_HELP = "Path to the data directory (default: auto-detect)"


class SortedGroup(TyperGroup):
    """Typer group that lists commands in alphabetical order."""

    def list_commands(self, ctx: click.Context) -> list[str]:
        """Return commands sorted alphabetically."""
        return sorted(super().list_commands(ctx))


def resolve_data_dir(data_dir: str | None) -> str:
    """Return *data_dir*, or the auto-detected data directory when it is None."""
    return data_dir if data_dir is not None else find_data_dir()


def get_workspace(data_dir: str | None = None) -> Workspace:
    """Open the workspace for an initialized data directory.

    Exits with status 1 if the directory has not been initialized.
    """
    resolved = resolve_data_dir(data_dir)
    if not Path(resolved).is_dir():
        echo_error(
            f"No data directory at '{resolved}'. Run 'cfix init' first.",
        )
        raise typer.Exit(1)
    return open_workspace(resolved)
