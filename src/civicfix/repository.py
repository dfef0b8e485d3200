"""Reads and lifecycle mutations of active issues."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from civicfix.constants import (
    ASSIGNMENT_NOTE_PREFIX,
    DEFAULT_AUTHORITY,
    DEFAULT_PRIORITY,
    DEFAULT_REPORTER,
    ISSUES_COLLECTION,
)
from civicfix.errors import IssueNotFoundError
from civicfix.idgen import IDGenerator
from civicfix.models import (
    Issue,
    IssueUpdate,
    Status,
    dict_to_issue,
    enum_value,
    issue_to_dict,
    update_to_dict,
)
from civicfix.utils import utc_now_iso

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from civicfix.archive import ArchiveService
    from civicfix.storage import RecordStore

logger = logging.getLogger(__name__)


def _find(records: list[dict[str, Any]], issue_id: str) -> int:
    """Return the index of the record with *issue_id*, or -1."""
    for idx, record in enumerate(records):
        if record.get("id") == issue_id:
            return idx
    return -1


class IssueRepository:
    """CRUD and lifecycle operations over the active issues collection.

    Every mutation reloads the whole collection, changes it in memory and
    saves it back while holding the collection lock.  Records other than the
    one being changed are written back exactly as they were loaded.
    """

    def __init__(
        self,
        store: RecordStore,
        archive: ArchiveService,
        *,
        reporter_label: str = DEFAULT_REPORTER,
        authority_label: str = DEFAULT_AUTHORITY,
    ) -> None:
        """Initialize the repository.

        Args:
            store: Record store holding the issues collection.
            archive: Archive used when issues are deleted.
            reporter_label: ``reportedBy`` value when the reporter is omitted.
            authority_label: ``by`` value of notes appended on assignment.
        """
        self.store = store
        self.archive = archive
        self.reporter_label = reporter_label
        self.authority_label = authority_label

    def seed(self) -> bool:
        """Create an empty issues collection if it does not exist yet."""
        return self.store.ensure_initialized(ISSUES_COLLECTION)

    def list_all(self) -> list[Issue]:
        """Return all active issues in stored order."""
        issues: list[Issue] = []
        for data in self.store.load(ISSUES_COLLECTION):
            try:
                issues.append(dict_to_issue(data))
            except ValueError as e:
                logger.warning("Skipping issue record: %s", e)
        return issues

    def get(self, issue_id: str) -> Issue:
        """Get an active issue by ID.

        Raises:
            IssueNotFoundError: If no active issue has that ID.
        """
        records = self.store.load(ISSUES_COLLECTION)
        idx = _find(records, issue_id)
        if idx == -1:
            raise IssueNotFoundError(issue_id)
        return dict_to_issue(records[idx])

    def create(self, data: Mapping[str, Any]) -> Issue:
        """Create a new issue from reporter input.

        Input is accepted leniently: missing ``type``, ``title`` or
        ``description`` are stored as null.  Empty values of defaulted fields
        count as omitted.

        Args:
            data: Reporter input using wire (camelCase) keys.

        Returns:
            The created issue.
        """
        with self.store.lock(ISSUES_COLLECTION):
            records = self.store.load(ISSUES_COLLECTION)
            media = data.get("media")
            id_gen = IDGenerator(
                existing_ids={r["id"] for r in records if r.get("id")},
            )
            issue = Issue(
                id=id_gen.generate_issue_id(),
                issue_type=data.get("type"),
                title=data.get("title"),
                description=data.get("description"),
                location=data.get("location") or data.get("manualAddress") or "",
                coordinates=data.get("coordinates") or None,
                status=Status.PENDING.value,
                priority=enum_value(data.get("priority")) or DEFAULT_PRIORITY,
                reported_by=data.get("reportedBy") or self.reporter_label,
                reported_at=utc_now_iso(),
                media=list(media) if isinstance(media, list) else [],
                voice_note=data.get("voiceNote") or None,
            )
            records.append(issue_to_dict(issue))
            self.store.save(ISSUES_COLLECTION, records)

        logger.info("Created issue %s", issue.id)
        return issue

    def _mutate(
        self,
        issue_id: str,
        change: Callable[[dict[str, Any]], None],
    ) -> Issue:
        """Apply *change* to the stored record with *issue_id* and persist it.

        *change* edits the raw record in place, so keys it does not touch
        (including unknown ones) are written back unchanged.

        Raises:
            IssueNotFoundError: If no active issue has that ID.  Nothing is
                written in that case.
        """
        with self.store.lock(ISSUES_COLLECTION):
            records = self.store.load(ISSUES_COLLECTION)
            idx = _find(records, issue_id)
            if idx == -1:
                raise IssueNotFoundError(issue_id)

            change(records[idx])
            self.store.save(ISSUES_COLLECTION, records)
        return dict_to_issue(records[idx])

    def update_status(self, issue_id: str, new_status: Any) -> Issue:
        """Overwrite the status of an issue.

        No transition graph is enforced: any value may follow any other and
        unrecognized values are stored as given.  An empty status keeps the
        current one.

        Raises:
            IssueNotFoundError: If no active issue has that ID.
        """

        def change(record: dict[str, Any]) -> None:
            value = enum_value(new_status)
            if value:
                record["status"] = value

        issue = self._mutate(issue_id, change)
        logger.info("Issue %s status set to %s", issue_id, issue.status)
        return issue

    def assign(
        self,
        issue_id: str,
        department: str | None = None,
        assigned_to: str | None = None,
        priority: str | None = None,
        instructions: str | None = None,
    ) -> Issue:
        """Assign an issue to a department and/or person.

        Fields that are not provided keep their current values.
        ``assignedAt`` is always stamped.  A pending issue advances to
        in-progress; other statuses are left alone.  Instructions, when
        given, are appended to the issue's updates; earlier updates are
        never modified.

        Raises:
            IssueNotFoundError: If no active issue has that ID.
        """

        def change(record: dict[str, Any]) -> None:
            now = utc_now_iso()
            if department:
                record["department"] = department
            if assigned_to:
                record["assignedTo"] = assigned_to
            if enum_value(priority):
                record["priority"] = enum_value(priority)
            record["assignedAt"] = now
            if record.get("status", Status.PENDING.value) == Status.PENDING.value:
                record["status"] = Status.IN_PROGRESS.value
            if instructions:
                updates = record.get("updates")
                if not isinstance(updates, list):
                    updates = []
                update = IssueUpdate(
                    date=now,
                    note=f"{ASSIGNMENT_NOTE_PREFIX}{instructions}",
                    by=self.authority_label,
                )
                record["updates"] = [*updates, update_to_dict(update)]

        issue = self._mutate(issue_id, change)
        logger.info("Issue %s assigned to %s", issue_id, issue.department)
        return issue

    def delete(self, issue_id: str) -> Issue:
        """Remove an issue from the active collection, archiving it first.

        The stored record is archived as-is with ``archivedAt`` added.  If
        the active collection cannot be rewritten afterwards, the archive
        is rolled back.

        Returns:
            The removed issue.

        Raises:
            IssueNotFoundError: If no active issue has that ID.
            PersistenceError: If either collection could not be written.
        """
        with self.store.lock(ISSUES_COLLECTION):
            records = self.store.load(ISSUES_COLLECTION)
            idx = _find(records, issue_id)
            if idx == -1:
                raise IssueNotFoundError(issue_id)

            removed = records.pop(idx)
            self.archive.move_to_archive([removed], records)

        logger.info("Deleted issue %s", issue_id)
        return dict_to_issue(removed)
