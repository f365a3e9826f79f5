"""Tag grouping: prefix classification, group ordering and tag windows."""

from tagdelta.grouping.classifier import (
    KNOWN_PREFIX_PRIORITY,
    UNKNOWN_PREFIX_PRIORITY,
    classify_tags,
    prefix_priority,
    sort_groups,
)
from tagdelta.grouping.window import select_window

__all__ = [
    "KNOWN_PREFIX_PRIORITY",
    "UNKNOWN_PREFIX_PRIORITY",
    "classify_tags",
    "prefix_priority",
    "sort_groups",
    "select_window",
]
