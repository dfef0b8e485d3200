"""Startup wiring: one data directory, its collections and the services over them."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from civicfix.archive import ArchiveService
from civicfix.config import load_config
from civicfix.constants import (
    ARCHIVE_COLLECTION,
    DEFAULT_AUTHORITY,
    DEFAULT_REPORTER,
    DEPARTMENTS_COLLECTION,
    ISSUES_COLLECTION,
)
from civicfix.departments import DepartmentCatalog
from civicfix.repository import IssueRepository
from civicfix.storage import RecordStore


@dataclass
class Workspace:
    """The services bound to one data directory."""

    data_dir: Path
    store: RecordStore
    departments: DepartmentCatalog
    archive: ArchiveService
    issues: IssueRepository


def open_workspace(data_dir: str | Path, *, create: bool = False) -> Workspace:
    """Wire the services for *data_dir*.

    Args:
        data_dir: Directory holding the collections and config.toml.
        create: Create the directory if missing (otherwise it must exist).

    Raises:
        ValueError: If the directory does not exist and *create* is False.
    """
    store = RecordStore(data_dir, create_dir=create)
    config = load_config(store.data_dir)
    archive = ArchiveService(store)
    return Workspace(
        data_dir=store.data_dir,
        store=store,
        departments=DepartmentCatalog(store),
        archive=archive,
        issues=IssueRepository(
            store,
            archive,
            reporter_label=config.get("reporter_label", DEFAULT_REPORTER),
            authority_label=config.get("authority_label", DEFAULT_AUTHORITY),
        ),
    )


def init_workspace(data_dir: str | Path) -> tuple[Workspace, list[str]]:
    """Create *data_dir* if needed and seed any collection that is missing.

    Safe to call on every process start: existing collections are never
    overwritten and departments are seeded at most once.

    Returns:
        The workspace and the names of the collections created by this call.
    """
    workspace = open_workspace(data_dir, create=True)
    created: list[str] = []
    if workspace.issues.seed():
        created.append(ISSUES_COLLECTION)
    if workspace.departments.seed():
        created.append(DEPARTMENTS_COLLECTION)
    if workspace.archive.seed():
        created.append(ARCHIVE_COLLECTION)
    return workspace, created
