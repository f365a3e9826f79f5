"""Data models for tag grouping and reports."""

from tagdelta.models.config import DEFAULT_GROUP_PREFIXES, Settings, ViewerConfig
from tagdelta.models.report import (
    CommitRecord,
    GroupEntry,
    RawCommit,
    Report,
    ResolvedTag,
    TagEntry,
    TagGroupSpec,
)

__all__ = [
    "CommitRecord",
    "GroupEntry",
    "RawCommit",
    "Report",
    "ResolvedTag",
    "TagEntry",
    "TagGroupSpec",
    "DEFAULT_GROUP_PREFIXES",
    "Settings",
    "ViewerConfig",
]
