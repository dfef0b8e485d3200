"""Read-only catalog of departments issues can be assigned to."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from civicfix.constants import DEFAULT_DEPARTMENTS, DEPARTMENTS_COLLECTION
from civicfix.models import Department, dict_to_department

if TYPE_CHECKING:
    from civicfix.storage import RecordStore

logger = logging.getLogger(__name__)


class DepartmentCatalog:
    """Static department reference list, seeded once per data directory."""

    def __init__(self, store: RecordStore) -> None:
        self.store = store

    def seed(self) -> bool:
        """Write the default departments if the collection does not exist yet.

        Returns:
            True if the departments were seeded by this call.
        """
        return self.store.ensure_initialized(DEPARTMENTS_COLLECTION, DEFAULT_DEPARTMENTS)

    def list(self) -> list[Department]:
        """Return all departments in persisted order."""
        departments: list[Department] = []
        for data in self.store.load(DEPARTMENTS_COLLECTION):
            try:
                departments.append(dict_to_department(data))
            except ValueError as e:
                logger.warning("Skipping department record: %s", e)
        return departments

    def get(self, department_id: str) -> Department | None:
        """Get a department by ID, or None if unknown."""
        for department in self.list():
            if department.id == department_id:
                return department
        return None
