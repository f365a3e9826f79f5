"""Commit range resolution for tags in a group window.

Two modes, picked by ``commits_per_tag``:

* Range mode (``commits_per_tag == 0``): each tag shows the commits reachable
  from it but not from the next-older tag in the window, capped at
  ``commit_limit``. The oldest tag in the window has nothing to diff against
  and shows its most recent ``OLDEST_TAG_FALLBACK_COUNT`` commits instead.
  That fallback cap is fixed and never marks the tag as truncated.
* Fixed-count mode (``commits_per_tag > 0``): every tag shows its most recent
  ``commits_per_tag`` commits.
"""

from typing import List, Optional, Sequence, Tuple

import structlog

from tagdelta.errors import PerTagHistoryError
from tagdelta.extraction.tag_source import TagSource
from tagdelta.models import CommitRecord, ResolvedTag, TagEntry, ViewerConfig

logger = structlog.get_logger(__name__)

# Commits shown for the oldest tag of a window in range mode.
# TODO: decide with product whether this should follow commit_limit instead.
OLDEST_TAG_FALLBACK_COUNT = 20


def truncation_note(limit: int) -> str:
    return f"showing at most {limit} commits"


class CommitRangeResolver:
    """Resolves the commits shown for each tag of a group window."""

    def __init__(self, tag_source: TagSource, config: ViewerConfig) -> None:
        """Initialize the resolver.

        Args:
            tag_source: Source of per-tag commit history
            config: Report configuration (mode and limits)
        """
        self.tag_source = tag_source
        self.config = config

    def resolve_window(self, window: Sequence[ResolvedTag]) -> List[TagEntry]:
        """Resolve every tag in a window, preserving window order.

        Args:
            window: Selected tags of one group, newest first

        Returns:
            One TagEntry per tag, in the same order
        """
        entries = []
        for index, tag in enumerate(window):
            older = window[index + 1] if index + 1 < len(window) else None
            entries.append(self.resolve_tag(tag, older))
        return entries

    def resolve_tag(self, tag: ResolvedTag, older: Optional[ResolvedTag]) -> TagEntry:
        """Resolve the commits of one tag.

        A history failure is logged and yields an empty, untruncated entry so
        the remaining tags still resolve.

        Args:
            tag: Tag to resolve
            older: Next-older tag in the same window, if any

        Returns:
            TagEntry for the tag
        """
        max_count, from_tag, cap = self._plan(older)
        try:
            raw_commits = self.tag_source.history(tag.name, max_count, from_tag=from_tag)
        except PerTagHistoryError as e:
            logger.warning("tag_history_failed", tag=tag.name, group=tag.group, error=e.reason)
            return TagEntry(name=tag.name)

        commits = [CommitRecord.from_raw(commit) for commit in raw_commits[:max_count]]
        truncated = cap is not None and len(commits) == cap
        return TagEntry(
            name=tag.name,
            commits=commits,
            truncated=truncated,
            truncation_note=truncation_note(cap) if truncated else "",
        )

    def _plan(self, older: Optional[ResolvedTag]) -> Tuple[int, Optional[str], Optional[int]]:
        """Pick the history query for a tag.

        Returns:
            Tuple of (max_count, lower-bound tag or None, truncation cap or None)
        """
        if not self.config.range_mode:
            return (self.config.commits_per_tag, None, self.config.commits_per_tag)
        if older is not None:
            return (self.config.commit_limit, older.name, self.config.commit_limit)
        return (OLDEST_TAG_FALLBACK_COUNT, None, None)
