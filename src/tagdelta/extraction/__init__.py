"""Git repository access: tag listing, commit ranges and tag refresh."""

from tagdelta.extraction.refresh import (
    RefreshOutcome,
    RefreshStatus,
    TagRefresher,
    classify_pull_outcome,
)
from tagdelta.extraction.tag_source import (
    GitTagSource,
    TagSource,
    open_repository,
    validate_repository,
)

__all__ = [
    "GitTagSource",
    "TagSource",
    "open_repository",
    "validate_repository",
    "RefreshOutcome",
    "RefreshStatus",
    "TagRefresher",
    "classify_pull_outcome",
]
