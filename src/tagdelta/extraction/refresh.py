"""Resynchronise local tags with the remote.

Removes every local tag, then runs ``git pull --prune --tags`` so the local
tag set mirrors the remote exactly. Running it twice in a row leaves the
repository in the same state.

``git pull`` reports progress on stderr and GitPython surfaces some benign
runs as errors, so the outcome is classified from the command's text.
The phrase lists below are the only place this heuristic lives. They depend
on git's English output and are a known fragility point: a localized git or a
change in git's wording will be classified as a failure.
"""

from enum import Enum
from pathlib import Path
from typing import Optional

import git
import structlog
from git import Repo
from pydantic import BaseModel, Field

from tagdelta.errors import RefreshError
from tagdelta.extraction.tag_source import open_repository

logger = structlog.get_logger(__name__)

# Text that shows the pull actually fetched or had nothing to do.
SUCCESS_PHRASES = (
    "new tag",
    "Already up to date",
    "From ",
)

# Transport and authentication failures. These win over SUCCESS_PHRASES
# because git prints "From <remote>" before some of them.
FAILURE_PHRASES = (
    "Authentication failed",
    "Could not resolve host",
    "Permission denied",
    "unable to access",
    "Could not read from remote repository",
)


class RefreshStatus(str, Enum):
    """Result kind of a tag refresh."""

    SUCCESS = "success"
    FAILURE = "failure"


class RefreshOutcome(BaseModel):
    """Classified result of a tag refresh."""

    status: RefreshStatus = Field(..., description="Success or failure")
    message: str = Field("", description="Output of the git command that decided the outcome")
    tags_deleted: int = Field(0, description="Number of local tags removed before pulling")

    @classmethod
    def success(cls, message: str = "", tags_deleted: int = 0) -> "RefreshOutcome":
        return cls(status=RefreshStatus.SUCCESS, message=message, tags_deleted=tags_deleted)

    @classmethod
    def failure(cls, message: str, tags_deleted: int = 0) -> "RefreshOutcome":
        return cls(status=RefreshStatus.FAILURE, message=message, tags_deleted=tags_deleted)

    @property
    def ok(self) -> bool:
        return self.status is RefreshStatus.SUCCESS


def classify_pull_outcome(message: str) -> RefreshOutcome:
    """Classify the text of an error-shaped ``git pull`` run.

    Args:
        message: Combined stdout/stderr of the failed command

    Returns:
        Success if the text shows a benign outcome, failure otherwise
    """
    if any(phrase in message for phrase in FAILURE_PHRASES):
        return RefreshOutcome.failure(message)
    if any(phrase in message for phrase in SUCCESS_PHRASES):
        return RefreshOutcome.success(message)
    return RefreshOutcome.failure(message)


class TagRefresher:
    """Deletes all local tags and re-fetches them from the remote."""

    def __init__(self, repo_path: Path, repo: Optional[Repo] = None) -> None:
        """Initialize the refresher.

        Args:
            repo_path: Path to the Git repository
            repo: Already opened repository (optional)

        Raises:
            RepositoryAccessError: If the repository cannot be opened
        """
        self.repo_path = Path(repo_path)
        self.repo = repo if repo is not None else open_repository(self.repo_path)

    def delete_local_tags(self) -> int:
        """Delete every local tag, skipping tags git refuses to delete.

        Returns:
            Number of tags deleted
        """
        tag_names = [tag.name for tag in self.repo.tags]
        deleted = 0
        for name in tag_names:
            try:
                self.repo.git.tag("-d", name)
                deleted += 1
            except git.GitCommandError as e:
                logger.warning("tag_delete_skipped", tag=name, error=str(e))
        logger.info("local_tags_deleted", repo=str(self.repo_path), deleted=deleted, total=len(tag_names))
        return deleted

    def resync_all_tags(self) -> RefreshOutcome:
        """Delete local tags and pull all remote tags with pruning.

        Returns:
            RefreshOutcome describing whether the pull succeeded
        """
        deleted = self.delete_local_tags()

        try:
            output = self.repo.git.pull("--prune", "--tags")
        except git.GitCommandError as e:
            text = "\n".join(part for part in (str(e.stdout), str(e.stderr)) if part)
            outcome = classify_pull_outcome(text)
            outcome.tags_deleted = deleted
            if outcome.ok:
                logger.info("tag_pull_benign_error", repo=str(self.repo_path))
            else:
                logger.error("tag_pull_failed", repo=str(self.repo_path), error=text)
            return outcome

        logger.info("tag_pull_completed", repo=str(self.repo_path))
        return RefreshOutcome.success(output, tags_deleted=deleted)

    def refresh(self) -> RefreshOutcome:
        """Resync all tags, raising on failure.

        Raises:
            RefreshError: If the pull failed
        """
        outcome = self.resync_all_tags()
        if not outcome.ok:
            raise RefreshError(f"Tag refresh failed: {outcome.message.strip()}")
        return outcome
