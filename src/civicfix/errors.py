"""Exceptions raised by the civicfix core."""

from __future__ import annotations


class IssueNotFoundError(ValueError):
    """Raised when an operation references an ID absent from the active issues."""

    def __init__(self, issue_id: str) -> None:
        self.issue_id = issue_id
        super().__init__(f"Issue {issue_id} not found")


class PersistenceError(RuntimeError):
    """Raised when a collection could not be written to disk."""
