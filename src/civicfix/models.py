"""Data models for civicfix issues using dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from civicfix.constants import DEFAULT_PRIORITY, DEFAULT_REPORTER


class Status(str, Enum):
    """Known issue statuses.

    Status updates are not restricted to these values; any string supplied
    by a caller is stored as-is.
    """

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"


class Priority(str, Enum):
    """Known issue priorities."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass
class IssueUpdate:
    """An annotation appended to an issue's history."""

    date: str | None = None
    note: str | None = None
    by: str | None = None
    extra: dict[str, Any] = field(default_factory=dict[str, Any])


@dataclass
class Department:
    """A department an issue can be assigned to."""

    id: str
    name: str


@dataclass
class Issue:
    """A citizen-reported issue."""

    id: str
    issue_type: str | None = None
    title: str | None = None
    description: str | None = None
    location: str = ""
    coordinates: dict[str, Any] | None = None
    status: str = Status.PENDING.value
    priority: str = DEFAULT_PRIORITY
    reported_by: str = DEFAULT_REPORTER
    reported_at: str | None = None
    assigned_to: str | None = None
    assigned_at: str | None = None
    department: str | None = None
    media: list[Any] = field(default_factory=list[Any])
    voice_note: Any = None
    updates: list[IssueUpdate] = field(default_factory=list[IssueUpdate])
    # Keys found on disk that this model does not know about
    extra: dict[str, Any] = field(default_factory=dict[str, Any])

    def is_pending(self) -> bool:
        """Check if the issue has not been picked up yet."""
        return self.status == Status.PENDING.value

    def is_resolved(self) -> bool:
        """Check if the issue is resolved."""
        return self.status == Status.RESOLVED.value

    def is_assigned(self) -> bool:
        """Check if the issue has gone through an assignment."""
        return self.assigned_at is not None


@dataclass
class ArchivedIssue(Issue):
    """An issue moved out of the active collection."""

    archived_at: str | None = None


# Wire name -> attribute name, in the order fields are written
_ISSUE_FIELDS: tuple[tuple[str, str], ...] = (
    ("id", "id"),
    ("type", "issue_type"),
    ("title", "title"),
    ("description", "description"),
    ("location", "location"),
    ("coordinates", "coordinates"),
    ("status", "status"),
    ("priority", "priority"),
    ("reportedBy", "reported_by"),
    ("reportedAt", "reported_at"),
    ("assignedTo", "assigned_to"),
    ("assignedAt", "assigned_at"),
    ("department", "department"),
    ("media", "media"),
    ("voiceNote", "voice_note"),
    ("updates", "updates"),
)

_KNOWN_ISSUE_KEYS = frozenset(wire for wire, _ in _ISSUE_FIELDS)

_KNOWN_UPDATE_KEYS = frozenset(("date", "note", "by"))


def update_to_dict(update: IssueUpdate) -> dict[str, Any]:
    """Convert an IssueUpdate to its wire dictionary."""
    data: dict[str, Any] = {"date": update.date, "note": update.note, "by": update.by}
    for key, value in update.extra.items():
        data.setdefault(key, value)
    return data


def dict_to_update(data: dict[str, Any]) -> IssueUpdate:
    """Convert a wire dictionary to an IssueUpdate, keeping unknown keys."""
    return IssueUpdate(
        date=data.get("date"),
        note=data.get("note"),
        by=data.get("by"),
        extra={k: v for k, v in data.items() if k not in _KNOWN_UPDATE_KEYS},
    )


def _as_list(value: Any) -> list[Any]:
    return list(value) if isinstance(value, list) else []


def issue_to_dict(issue: Issue) -> dict[str, Any]:
    """Convert an Issue to its wire dictionary (camelCase keys)."""
    data: dict[str, Any] = {}
    for wire, attr in _ISSUE_FIELDS:
        value = getattr(issue, attr)
        if attr == "updates":
            value = [update_to_dict(u) for u in value]
        data[wire] = value
    for key, value in issue.extra.items():
        data.setdefault(key, value)
    if isinstance(issue, ArchivedIssue):
        data["archivedAt"] = issue.archived_at
    return data


def dict_to_issue(data: dict[str, Any]) -> Issue:
    """Convert a wire dictionary to an Issue.

    Missing keys fall back to the model defaults. Unknown keys are kept in
    ``extra`` so that rewriting the record does not drop them.  A ``media``
    or ``updates`` value that is not a list reads as empty, and non-object
    update entries are skipped.

    Raises:
        ValueError: If the record has no ``id``.
    """
    if not data.get("id"):
        msg = "Issue record has no id"
        raise ValueError(msg)

    return Issue(
        id=data["id"],
        issue_type=data.get("type"),
        title=data.get("title"),
        description=data.get("description"),
        location=data.get("location", ""),
        coordinates=data.get("coordinates"),
        status=data.get("status", Status.PENDING.value),
        priority=data.get("priority", DEFAULT_PRIORITY),
        reported_by=data.get("reportedBy", DEFAULT_REPORTER),
        reported_at=data.get("reportedAt"),
        assigned_to=data.get("assignedTo"),
        assigned_at=data.get("assignedAt"),
        department=data.get("department"),
        media=_as_list(data.get("media")),
        voice_note=data.get("voiceNote"),
        updates=[
            dict_to_update(u) for u in _as_list(data.get("updates")) if isinstance(u, dict)
        ],
        extra={k: v for k, v in data.items() if k not in _KNOWN_ISSUE_KEYS},
    )


def dict_to_archived_issue(data: dict[str, Any]) -> ArchivedIssue:
    """Convert an archive record to an ArchivedIssue."""
    issue = dict_to_issue(data)
    extra = dict(issue.extra)
    archived_at = extra.pop("archivedAt", None)
    fields = {attr: getattr(issue, attr) for _, attr in _ISSUE_FIELDS}
    return ArchivedIssue(**fields, extra=extra, archived_at=archived_at)


def department_to_dict(department: Department) -> dict[str, Any]:
    """Convert a Department to its wire dictionary."""
    return {"id": department.id, "name": department.name}


def dict_to_department(data: dict[str, Any]) -> Department:
    """Convert a wire dictionary to a Department.

    Raises:
        ValueError: If the record has no ``id``.
    """
    if not data.get("id"):
        msg = "Department record has no id"
        raise ValueError(msg)
    return Department(id=data["id"], name=data.get("name") or data["id"])


def enum_value(value: Any) -> Any:
    """Normalize a value for storage (Enum -> string, anything else as-is)."""
    if isinstance(value, Enum):
        return value.value
    return value
