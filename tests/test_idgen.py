"""Tests for issue ID generation."""

import re

import pytest

from civicfix.constants import ISSUE_ID_PATTERN
from civicfix.idgen import IDGenerator, generate_issue_id


class TestGenerateIssueId:
    """Test the bare ID generator."""

    def test_format(self) -> None:
        """IDs are ISS- followed by six uppercase alphanumerics."""
        for _ in range(200):
            assert re.match(ISSUE_ID_PATTERN, generate_issue_id())

    def test_ids_vary(self) -> None:
        """Consecutive IDs are not all the same."""
        ids = {generate_issue_id() for _ in range(50)}
        assert len(ids) > 1


class TestIDGenerator:
    """Test collision handling."""

    def test_generated_ids_are_unique(self) -> None:
        """IDs from one generator never repeat."""
        gen = IDGenerator()
        ids = [gen.generate_issue_id() for _ in range(500)]
        assert len(set(ids)) == 500

    def test_avoids_existing_ids(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A candidate that already exists is retried."""
        candidates = iter(["ISS-AAAAAA", "ISS-AAAAAA", "ISS-BBBBBB"])
        monkeypatch.setattr(
            "civicfix.idgen.generate_issue_id",
            lambda length=6: next(candidates),
        )
        gen = IDGenerator(existing_ids={"ISS-AAAAAA"})
        assert gen.generate_issue_id() == "ISS-BBBBBB"
        assert "ISS-BBBBBB" in gen.existing_ids

    def test_gives_up_after_max_retries(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Exhausting every attempt raises instead of breaking the ID format."""
        monkeypatch.setattr(
            "civicfix.idgen.generate_issue_id",
            lambda length=6: "ISS-AAAAAA",
        )
        gen = IDGenerator(existing_ids={"ISS-AAAAAA"})
        gen.max_retries = 5
        with pytest.raises(RuntimeError, match="unique issue ID"):
            gen.generate_issue_id()
