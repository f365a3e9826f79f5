"""Shared fixtures for unit tests."""

from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

import pytest

from tagdelta.errors import PerTagHistoryError
from tagdelta.models import RawCommit


class FakeTagSource:
    """In-memory tag source over a single linear history.

    ``tag_positions`` maps tag name to the index of the commit it points at
    (0 = first commit). Tags are listed in the given order.
    """

    def __init__(
        self,
        tags: List[str],
        tag_positions: Optional[Dict[str, int]] = None,
        commit_count: int = 100,
        failing: Optional[List[str]] = None,
    ) -> None:
        start = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
        self.commits = [
            RawCommit(
                id=f"c{i:03d}" + "f" * 36,
                timestamp=start + timedelta(days=i),
                message=f"Commit {i}\n\nBody of commit {i}",
            )
            for i in range(commit_count)
        ]
        self.tags = list(tags)
        self.tag_positions = tag_positions or {}
        self.failing = set(failing or [])
        self.calls = []

    def list_tags_by_creation_date_descending(self) -> List[str]:
        return list(self.tags)

    def _reachable(self, tag: str) -> List[RawCommit]:
        position = self.tag_positions[tag]
        return list(reversed(self.commits[: position + 1]))

    def history(self, to_tag: str, max_count: int, from_tag: Optional[str] = None) -> List[RawCommit]:
        self.calls.append((to_tag, max_count, from_tag))
        if to_tag in self.failing:
            raise PerTagHistoryError(to_tag, "bad object")
        commits = self._reachable(to_tag)
        if from_tag is not None:
            excluded = {c.id for c in self._reachable(from_tag)}
            commits = [c for c in commits if c.id not in excluded]
        return commits[:max_count]


@pytest.fixture
def linear_source():
    """Tags v3 (commit 60), v2 (commit 30), v1 (commit 25), newest first."""
    return FakeTagSource(
        tags=["v3", "v2", "v1"],
        tag_positions={"v3": 60, "v2": 30, "v1": 25},
    )


@pytest.fixture
def make_source():
    """Factory for FakeTagSource instances."""
    return FakeTagSource
