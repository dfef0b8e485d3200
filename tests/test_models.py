"""Tests for civicfix data models."""

import pytest

from civicfix.models import (
    ArchivedIssue,
    Department,
    Issue,
    IssueUpdate,
    Priority,
    Status,
    dict_to_archived_issue,
    dict_to_department,
    dict_to_issue,
    enum_value,
    issue_to_dict,
)


class TestIssue:
    """Test Issue defaults and helpers."""

    def test_defaults(self) -> None:
        """A bare issue is pending, medium priority and unassigned."""
        issue = Issue(id="ISS-ABC123")
        assert issue.status == "pending"
        assert issue.priority == "medium"
        assert issue.reported_by == "Citizen User"
        assert issue.assigned_to is None
        assert issue.department is None
        assert issue.updates == []
        assert issue.media == []

    def test_status_helpers(self) -> None:
        """is_pending/is_resolved follow the status string."""
        issue = Issue(id="ISS-ABC123")
        assert issue.is_pending()
        issue.status = Status.RESOLVED.value
        assert issue.is_resolved()
        assert not issue.is_pending()

    def test_enum_values(self) -> None:
        """Status and priority enums use the wire strings."""
        assert Status.IN_PROGRESS.value == "in-progress"
        assert Priority.HIGH.value == "high"
        assert enum_value(Status.RESOLVED) == "resolved"
        assert enum_value("closed") == "closed"
        assert enum_value(None) is None


class TestIssueSerialization:
    """Test conversion between Issue and wire dictionaries."""

    def test_issue_to_dict_uses_camel_case(self) -> None:
        """Wire keys use the camelCase field names."""
        issue = Issue(
            id="ISS-ABC123",
            issue_type="pothole",
            reported_at="2024-01-01T00:00:00+00:00",
            voice_note={"url": "/uploads/a.webm"},
            updates=[IssueUpdate(date="d", note="n", by="Authority")],
        )
        data = issue_to_dict(issue)
        assert data["type"] == "pothole"
        assert data["reportedAt"] == "2024-01-01T00:00:00+00:00"
        assert data["voiceNote"] == {"url": "/uploads/a.webm"}
        assert data["updates"] == [{"date": "d", "note": "n", "by": "Authority"}]
        assert data["assignedTo"] is None
        assert "issue_type" not in data

    def test_record_survives_conversion(self) -> None:
        """A stored record converts to an Issue and back unchanged."""
        record = {
            "id": "ISS-ABC123",
            "type": "streetlight",
            "title": "Light out",
            "description": "Dark corner",
            "location": "5th Ave",
            "coordinates": {"lat": 1.0, "lng": 2.0},
            "status": "in-progress",
            "priority": "high",
            "reportedBy": "Jane",
            "reportedAt": "2024-01-01T10:00:00.000Z",
            "assignedTo": "Crew 4",
            "assignedAt": "2024-01-02T10:00:00.000Z",
            "department": "electrical",
            "media": [{"url": "/uploads/x.jpg", "mimetype": "image/jpeg", "size": 10}],
            "voiceNote": None,
            "updates": [{"date": "2024-01-02", "note": "go", "by": "Authority"}],
        }
        assert issue_to_dict(dict_to_issue(record)) == record

    def test_unknown_keys_are_kept(self) -> None:
        """Keys the model does not know are written back as they were."""
        record = {"id": "ISS-ABC123", "title": "x", "ward": 7, "tags": ["a"]}
        issue = dict_to_issue(record)
        assert issue.extra == {"ward": 7, "tags": ["a"]}
        data = issue_to_dict(issue)
        assert data["ward"] == 7
        assert data["tags"] == ["a"]

    def test_unknown_update_keys_are_kept(self) -> None:
        """Update entries keep keys the model does not know."""
        update = {"date": "d", "note": "n", "by": "b", "photo": "p.jpg"}
        issue = dict_to_issue({"id": "ISS-ABC123", "updates": [update]})
        assert issue.updates[0].extra == {"photo": "p.jpg"}
        assert issue_to_dict(issue)["updates"] == [update]

    def test_malformed_nested_values(self) -> None:
        """Non-list media/updates read as empty; non-object updates are skipped."""
        issue = dict_to_issue(
            {"id": "ISS-ABC123", "media": "abc", "updates": ["old", {"note": "n"}]},
        )
        assert issue.media == []
        assert issue.updates == [IssueUpdate(note="n")]

    def test_missing_fields_use_defaults(self) -> None:
        """Sparse records load with model defaults."""
        issue = dict_to_issue({"id": "ISS-ABC123"})
        assert issue.status == "pending"
        assert issue.title is None
        assert issue.location == ""

    def test_record_without_id_rejected(self) -> None:
        """A record without an id is not an issue."""
        with pytest.raises(ValueError, match="no id"):
            dict_to_issue({"title": "orphan"})


class TestArchivedIssue:
    """Test archived issue conversion."""

    def test_archived_at_round_trip(self) -> None:
        """archivedAt is lifted out of extra and written last."""
        record = {"id": "ISS-ABC123", "status": "resolved", "archivedAt": "t"}
        archived = dict_to_archived_issue(record)
        assert isinstance(archived, ArchivedIssue)
        assert archived.archived_at == "t"
        assert "archivedAt" not in archived.extra
        data = issue_to_dict(archived)
        assert data["archivedAt"] == "t"
        assert list(data)[-1] == "archivedAt"


class TestDepartment:
    """Test department conversion."""

    def test_dict_to_department(self) -> None:
        """Departments load from id/name records."""
        dept = dict_to_department({"id": "traffic", "name": "Traffic Management"})
        assert dept == Department(id="traffic", name="Traffic Management")

    def test_name_falls_back_to_id(self) -> None:
        """A department without a name is named after its id."""
        assert dict_to_department({"id": "parks"}).name == "parks"

    def test_department_without_id_rejected(self) -> None:
        """A department record must carry an id."""
        with pytest.raises(ValueError, match="no id"):
            dict_to_department({"name": "Nameless"})
