"""Moves issues out of the active collection into the archive."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from civicfix.constants import ARCHIVE_COLLECTION, ISSUES_COLLECTION
from civicfix.errors import PersistenceError
from civicfix.models import ArchivedIssue, Status, dict_to_archived_issue
from civicfix.utils import utc_now_iso

if TYPE_CHECKING:
    from civicfix.storage import RecordStore

logger = logging.getLogger(__name__)


@dataclass
class ClearResult:
    """Outcome of clearing resolved issues."""

    removed: int
    remaining: int


class ArchiveService:
    """Copy-then-remove archiving of issues.

    The archive and the active collection are separate files, so a move is
    two writes.  The archive is always written first: a crash between the
    two writes can leave a record in both collections, never in neither.
    """

    def __init__(self, store: RecordStore) -> None:
        self.store = store

    def seed(self) -> bool:
        """Create an empty archive collection if it does not exist yet."""
        return self.store.ensure_initialized(ARCHIVE_COLLECTION)

    def list_archived(self) -> list[ArchivedIssue]:
        """Return every archived issue, oldest archival first."""
        archived: list[ArchivedIssue] = []
        for data in self.store.load(ARCHIVE_COLLECTION):
            try:
                archived.append(dict_to_archived_issue(data))
            except ValueError as e:
                logger.warning("Skipping archive record: %s", e)
        return archived

    def _append_records(
        self,
        records: list[dict[str, Any]],
        archived_at: str,
    ) -> list[dict[str, Any]]:
        """Append *records* stamped with *archived_at* to the archive.

        Must be called with the archive lock held.

        Returns:
            The archive content as it was before the append.
        """
        previous = self.store.load(ARCHIVE_COLLECTION)
        stamped = [{**record, "archivedAt": archived_at} for record in records]
        self.store.save(ARCHIVE_COLLECTION, [*previous, *stamped])
        return previous

    def move_to_archive(
        self,
        moved: list[dict[str, Any]],
        remaining: list[dict[str, Any]],
        archived_at: str | None = None,
    ) -> list[ArchivedIssue]:
        """Append *moved* to the archive, then rewrite the active issues.

        Must be called with the issues lock held.  *moved* records are
        archived as raw copies with only ``archivedAt`` added.  If the active
        collection cannot be rewritten, the archive is restored to its
        previous content before the error propagates.

        Args:
            moved: Raw issue records leaving the active collection.
            remaining: Raw issue records to keep, in order.
            archived_at: Timestamp stamped on every moved record (default: now).

        Returns:
            The archived issues.

        Raises:
            PersistenceError: If either collection could not be written.
        """
        stamp = archived_at or utc_now_iso()
        with self.store.lock(ARCHIVE_COLLECTION):
            previous = self._append_records(moved, stamp)
            try:
                self.store.save(ISSUES_COLLECTION, remaining)
            except PersistenceError:
                logger.exception("Failed to rewrite issues, restoring archive")
                self._restore_archive(previous)
                raise

        archived: list[ArchivedIssue] = []
        for record in moved:
            try:
                archived.append(dict_to_archived_issue({**record, "archivedAt": stamp}))
            except ValueError as e:
                logger.warning("Archived record is not a valid issue: %s", e)
        return archived

    def clear_resolved(self) -> ClearResult:
        """Move every resolved issue from the active collection to the archive.

        The remaining issues are rewritten unmodified and in their original
        order.

        Raises:
            PersistenceError: If either collection could not be written.
        """
        with self.store.lock(ISSUES_COLLECTION):
            records = self.store.load(ISSUES_COLLECTION)
            resolved = [r for r in records if r.get("status") == Status.RESOLVED.value]
            remaining = [r for r in records if r.get("status") != Status.RESOLVED.value]

            if not resolved:
                return ClearResult(removed=0, remaining=len(remaining))

            self.move_to_archive(resolved, remaining)

        logger.info(
            "Cleared %d resolved issue(s), %d remaining",
            len(resolved),
            len(remaining),
        )
        return ClearResult(removed=len(resolved), remaining=len(remaining))

    def _restore_archive(self, previous: list[dict[str, Any]]) -> None:
        try:
            self.store.save(ARCHIVE_COLLECTION, previous)
        except PersistenceError:
            logger.exception("Failed to restore archive; archived issues are duplicated")
