"""Data models for grouped tag reports."""

from datetime import datetime, timezone
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

SHORT_HASH_LENGTH = 7

# Prefixes with a friendly display name. Every other prefix displays as itself.
RESERVED_PREFIX_ALIASES = {"v1.0.": "stg"}


class TagGroupSpec(BaseModel):
    """A configured tag group, identified by its literal name prefix."""

    model_config = ConfigDict(frozen=True)

    prefix: str = Field(..., description="Literal tag name prefix, compared case-sensitively")

    @property
    def display_name(self) -> str:
        """Name shown for the group in reports."""
        return RESERVED_PREFIX_ALIASES.get(self.prefix, self.prefix)

    def matches(self, tag_name: str) -> bool:
        return tag_name.startswith(self.prefix)


class ResolvedTag(BaseModel):
    """A tag selected for display within its group's window."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Raw tag name")
    group: str = Field(..., description="Prefix of the group the tag belongs to")
    position: int = Field(..., ge=0, description="Position in the group window (0 = newest)")


class RawCommit(BaseModel):
    """Commit data as supplied by a tag source."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Full commit identifier")
    timestamp: datetime = Field(..., description="Commit timestamp (timezone aware)")
    message: str = Field(..., description="Full commit message")


class CommitRecord(BaseModel):
    """A commit as shown in the report."""

    model_config = ConfigDict(frozen=True)

    short_hash: str = Field(..., description="Short commit hash (7 chars)")
    date: str = Field(..., description="Calendar date of the commit (YYYY-MM-DD)")
    message: str = Field(..., description="First line of the commit message")

    @field_validator("short_hash")
    @classmethod
    def _check_hash_length(cls, value: str) -> str:
        if len(value) != SHORT_HASH_LENGTH:
            raise ValueError(f"short_hash must be {SHORT_HASH_LENGTH} characters, got {value!r}")
        return value

    @classmethod
    def from_raw(cls, commit: RawCommit) -> "CommitRecord":
        """Project a raw commit into its display form."""
        message_lines = commit.message.strip().split("\n")
        timestamp = commit.timestamp
        if timestamp.tzinfo is not None:
            timestamp = timestamp.astimezone(timezone.utc)
        return cls(
            short_hash=commit.id[:SHORT_HASH_LENGTH].ljust(SHORT_HASH_LENGTH, "0"),
            date=timestamp.date().isoformat(),
            message=message_lines[0].rstrip("\r") if message_lines else "",
        )


class TagEntry(BaseModel):
    """Commits resolved for one tag."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "prd-v1.4.2",
                "commits": [
                    {"short_hash": "abc123d", "date": "2024-01-15", "message": "Fix login redirect"},
                ],
                "truncated": False,
                "truncation_note": "",
            }
        }
    )

    name: str = Field(..., description="Tag name")
    commits: List[CommitRecord] = Field(default_factory=list, description="Commits, newest first")
    truncated: bool = Field(False, description="Whether the commit count hit the applicable cap")
    truncation_note: str = Field("", description="Human readable note when truncated")


class GroupEntry(BaseModel):
    """One tag group in the report."""

    display_name: str = Field(..., description="Name shown for the group")
    prefix: str = Field(..., description="Configured prefix of the group")
    tags: List[TagEntry] = Field(default_factory=list, description="Tags, newest first")


class Report(BaseModel):
    """Groups of tags with their commit deltas, in group priority order."""

    groups: List[GroupEntry] = Field(default_factory=list, description="Non-empty groups")

    @property
    def tag_count(self) -> int:
        return sum(len(group.tags) for group in self.groups)

    @property
    def commit_count(self) -> int:
        return sum(len(tag.commits) for group in self.groups for tag in group.tags)

