"""Commit range resolution per tag."""

from tagdelta.resolution.resolver import OLDEST_TAG_FALLBACK_COUNT, CommitRangeResolver

__all__ = ["CommitRangeResolver", "OLDEST_TAG_FALLBACK_COUNT"]
