"""Routes for the civicfix issue API."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Body, Request
from pydantic import BaseModel, ConfigDict, Field

from civicfix.models import department_to_dict, issue_to_dict

if TYPE_CHECKING:
    from civicfix.workspace import Workspace

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


class StatusChange(BaseModel):
    """Body of PATCH /api/issues/{id}/status."""

    model_config = ConfigDict(extra="ignore")

    status: Any = None


class Assignment(BaseModel):
    """Body of POST /api/issues/{id}/assign."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    department: str | None = None
    assigned_to: str | None = Field(default=None, alias="assignedTo")
    priority: str | None = None
    instructions: str | None = None


class ClearResolvedRequest(BaseModel):
    """Body of POST /api/issues/clear-resolved."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    # Accepted for compatibility, not acted on
    keep_unresolved: Any = Field(default=None, alias="keepUnresolved")


def _workspace(request: Request) -> Workspace:
    return request.app.state.workspace


@router.get("/issues")
def list_issues(request: Request) -> list[dict[str, Any]]:
    """List all active issues."""
    return [issue_to_dict(i) for i in _workspace(request).issues.list_all()]


@router.post("/issues", status_code=201)
def create_issue(
    request: Request,
    payload: dict[str, Any] | None = Body(default=None),
) -> dict[str, Any]:
    """Report a new issue."""
    issue = _workspace(request).issues.create(payload or {})
    return issue_to_dict(issue)


@router.post("/issues/clear-resolved")
def clear_resolved(
    request: Request,
    body: ClearResolvedRequest | None = Body(default=None),
) -> dict[str, int]:
    """Archive every resolved issue."""
    result = _workspace(request).archive.clear_resolved()
    return {"removed": result.removed, "remaining": result.remaining}


@router.patch("/issues/{issue_id}/status")
def update_status(
    request: Request,
    issue_id: str,
    body: StatusChange | None = Body(default=None),
) -> dict[str, Any]:
    """Overwrite the status of an issue."""
    body = body or StatusChange()
    issue = _workspace(request).issues.update_status(issue_id, body.status)
    return issue_to_dict(issue)


@router.post("/issues/{issue_id}/assign")
def assign_issue(
    request: Request,
    issue_id: str,
    body: Assignment | None = Body(default=None),
) -> dict[str, Any]:
    """Assign an issue to a department."""
    body = body or Assignment()
    issue = _workspace(request).issues.assign(
        issue_id,
        department=body.department,
        assigned_to=body.assigned_to,
        priority=body.priority,
        instructions=body.instructions,
    )
    return issue_to_dict(issue)


@router.delete("/issues/{issue_id}")
def delete_issue(request: Request, issue_id: str) -> dict[str, bool]:
    """Remove an issue from the active list, archiving it."""
    _workspace(request).issues.delete(issue_id)
    return {"ok": True}


@router.get("/departments")
def list_departments(request: Request) -> list[dict[str, Any]]:
    """List all departments."""
    return [department_to_dict(d) for d in _workspace(request).departments.list()]


@router.get("/archive")
def list_archive(request: Request) -> list[dict[str, Any]]:
    """List archived issues."""
    return [issue_to_dict(i) for i in _workspace(request).archive.list_archived()]
