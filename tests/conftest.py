"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from civicfix.archive import ArchiveService
from civicfix.repository import IssueRepository
from civicfix.storage import RecordStore


@pytest.fixture
def temp_data_dir(tmp_path: Path) -> Path:
    """Create a temporary data directory for testing."""
    data_dir = tmp_path / ".civicfix"
    data_dir.mkdir()
    return data_dir


@pytest.fixture
def store(temp_data_dir: Path) -> RecordStore:
    """Create a record store over the temporary data directory."""
    return RecordStore(temp_data_dir)


@pytest.fixture
def archive(store: RecordStore) -> ArchiveService:
    """Create an archive service over the temporary store."""
    return ArchiveService(store)


@pytest.fixture
def repo(store: RecordStore, archive: ArchiveService) -> IssueRepository:
    """Create an issue repository over the temporary store."""
    return IssueRepository(store, archive)


POTHOLE = {"type": "pothole", "title": "Big hole", "description": "On Main St"}
