"""Exceptions raised by tagdelta."""

from typing import List, Optional


class TagDeltaError(Exception):
    """Base class for all tagdelta errors."""


class RepositoryAccessError(TagDeltaError):
    """Repository path is not a Git repository, or listing its tags failed."""


class PerTagHistoryError(TagDeltaError):
    """Reading the commit history of a single tag failed."""

    def __init__(self, tag: str, reason: str) -> None:
        super().__init__(f"Could not read history for tag {tag}: {reason}")
        self.tag = tag
        self.reason = reason


class RefreshError(TagDeltaError):
    """Tag refresh against the remote failed."""


class ConfigurationValidationError(TagDeltaError):
    """Configuration values are outside their allowed range."""

    def __init__(self, problems: List[str], message: Optional[str] = None) -> None:
        super().__init__(message or "; ".join(problems))
        self.problems = problems
