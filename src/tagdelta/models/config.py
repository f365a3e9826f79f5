"""Configuration models."""

from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic_settings import BaseSettings, SettingsConfigDict

from tagdelta.errors import ConfigurationValidationError

DEFAULT_GROUP_PREFIXES = [
    "prd-v",
    "uat-v",
    "v1.0.",
    "preview-v",
    "lab-athena",
    "lab-eevee",
    "lab-flareon",
]


class ViewerConfig(BaseModel):
    """Report configuration, persisted between runs.

    Stored as JSON with camelCase keys (``repositoryPath``, ``tagsPerGroup``,
    ``commitsPerTag``, ``commitLimit``, ``groupPrefixes``). Loading never
    rejects out-of-range values; call :meth:`validate_for_generation` before
    building a report.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    repository_path: str = Field("", description="Path to the Git repository")
    tags_per_group: int = Field(8, description="Maximum tags shown per group")
    commits_per_tag: int = Field(
        0, description="0 = commits since previous tag, >0 = fixed most-recent count"
    )
    commit_limit: int = Field(50, description="Commit cap per tag when diffing against previous tag")
    group_prefixes: List[str] = Field(
        default_factory=lambda: list(DEFAULT_GROUP_PREFIXES),
        description="Tag name prefixes, one group each",
    )

    @field_validator("repository_path", mode="before")
    @classmethod
    def _strip_path(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @field_validator("group_prefixes")
    @classmethod
    def _normalize_prefixes(cls, value: List[str]) -> List[str]:
        # Blank entries dropped, duplicates collapsed to the first occurrence
        seen = []
        for prefix in value:
            prefix = prefix.strip()
            if prefix and prefix not in seen:
                seen.append(prefix)
        return seen

    @property
    def range_mode(self) -> bool:
        """True when commits are resolved against the previous tag."""
        return self.commits_per_tag == 0

    def validate_for_generation(self) -> None:
        """Check that the values can drive a report.

        Raises:
            ConfigurationValidationError: With one entry per problem found
        """
        problems = []
        if not self.repository_path:
            problems.append("Repository path must not be empty")
        if self.tags_per_group < 1:
            problems.append("Tags per group must be at least 1")
        if self.commits_per_tag < 0:
            problems.append("Commits per tag must not be negative")
        if self.commit_limit < 1:
            problems.append("Commit limit must be at least 1")
        if not self.group_prefixes:
            problems.append("At least one group prefix is required")
        if problems:
            raise ConfigurationValidationError(problems)

    def to_json_dict(self) -> dict:
        """Serialize with the persisted camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TAGDELTA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    config_dir: Path = Field(
        default_factory=lambda: Path.home() / ".tagdelta",
        description="Directory holding config.json",
    )
    output_dir: Optional[Path] = Field(
        None, description="Directory for generated reports (defaults to the system temp dir)"
    )
    open_browser: bool = True

    # Logging
    log_level: str = "WARNING"
