"""Random ID generation for issues."""

from __future__ import annotations

import secrets

from civicfix.constants import ISSUE_ID_ALPHABET, ISSUE_ID_LENGTH, ISSUE_ID_PREFIX


def generate_issue_id(length: int = ISSUE_ID_LENGTH) -> str:
    """Generate a random issue ID such as ``ISS-7K2QZ0``.

    Args:
        length: Number of random characters after the prefix (default: 6)

    Returns:
        Issue ID including the ``ISS-`` prefix
    """
    suffix = "".join(secrets.choice(ISSUE_ID_ALPHABET) for _ in range(length))
    return f"{ISSUE_ID_PREFIX}{suffix}"


class IDGenerator:
    """Manages ID generation with collision detection."""

    def __init__(self, existing_ids: set[str] | None = None) -> None:
        """Initialize the ID generator.

        Args:
            existing_ids: Set of already-used IDs to detect collisions
        """
        self.existing_ids = existing_ids or set()
        self.max_retries = 100

    def generate_issue_id(self) -> str:
        """Generate an issue ID not present in ``existing_ids``.

        The ID length is fixed, so collisions are retried rather than
        resolved by growing the ID.

        Returns:
            Unique issue ID

        Raises:
            RuntimeError: If every attempt collided
        """
        for _ in range(self.max_retries):
            candidate = generate_issue_id()
            if candidate not in self.existing_ids:
                self.existing_ids.add(candidate)
                return candidate

        msg = f"Could not generate a unique issue ID after {self.max_retries} attempts"
        raise RuntimeError(msg)
