"""Tag and commit history access for a Git repository."""

from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Protocol, Tuple

import git
import structlog
from git import Commit, Repo

from tagdelta.errors import PerTagHistoryError, RepositoryAccessError
from tagdelta.models import RawCommit

logger = structlog.get_logger(__name__)


class TagSource(Protocol):
    """Supplies tags and per-tag commit history to the report builder."""

    def list_tags_by_creation_date_descending(self) -> List[str]:
        """Return every tag name, newest first."""
        ...

    def history(
        self, to_tag: str, max_count: int, from_tag: Optional[str] = None
    ) -> List[RawCommit]:
        """Return commits reachable from ``to_tag``, newest first.

        When ``from_tag`` is given, commits reachable from it are excluded.
        """
        ...


def open_repository(repo_path: Path) -> Repo:
    """Open a Git repository.

    Args:
        repo_path: Path to the repository working tree

    Returns:
        GitPython Repo object

    Raises:
        RepositoryAccessError: If the path is missing or not a Git repository
    """
    repo_path = Path(repo_path)
    if not repo_path.exists():
        raise RepositoryAccessError(f"Repository path does not exist: {repo_path}")

    try:
        return Repo(repo_path)
    except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
        raise RepositoryAccessError(f"Invalid Git repository: {repo_path}") from e


def validate_repository(repo_path: Path) -> Tuple[bool, Optional[str]]:
    """Check whether a path is a usable Git repository.

    Returns:
        Tuple of (is_valid, error message or None)
    """
    try:
        open_repository(repo_path)
    except RepositoryAccessError as e:
        return (False, str(e))
    return (True, None)


class GitTagSource:
    """Reads tags and commit ranges from a local Git repository."""

    def __init__(self, repo_path: Path, repo: Optional[Repo] = None) -> None:
        """Initialize the tag source.

        Args:
            repo_path: Path to the Git repository
            repo: Already opened repository (optional)

        Raises:
            RepositoryAccessError: If the repository cannot be opened
        """
        self.repo_path = Path(repo_path)
        self.repo = repo if repo is not None else open_repository(self.repo_path)

    def list_tags_by_creation_date_descending(self) -> List[str]:
        """List all tags sorted by creation date, newest first.

        Annotated tags sort by tagger date, lightweight tags by the date of
        the commit they point at.

        Raises:
            RepositoryAccessError: If git fails to list the tags
        """
        try:
            output = self.repo.git.for_each_ref(
                "--sort=-creatordate",
                "--format=%(refname:short)",
                "refs/tags",
            )
        except git.GitCommandError as e:
            raise RepositoryAccessError(f"Failed to list tags in {self.repo_path}: {e}") from e

        tags = [line.strip() for line in output.splitlines() if line.strip()]
        logger.debug("tags_listed", repo=str(self.repo_path), count=len(tags))
        return tags

    def history(
        self, to_tag: str, max_count: int, from_tag: Optional[str] = None
    ) -> List[RawCommit]:
        """Get the commits of a tag, newest first.

        Args:
            to_tag: Tag whose reachable commits are listed
            max_count: Maximum number of commits to return
            from_tag: Exclude commits reachable from this tag

        Returns:
            List of RawCommit objects

        Raises:
            PerTagHistoryError: If the range cannot be read
        """
        rev = f"{from_tag}..{to_tag}" if from_tag else to_tag
        try:
            commits = self.repo.iter_commits(rev, max_count=max_count)
            return [self._to_raw_commit(commit) for commit in commits]
        except (git.GitCommandError, git.BadName, ValueError, OverflowError, OSError) as e:
            # OverflowError/OSError: corrupt commit with an out-of-range date
            raise PerTagHistoryError(to_tag, str(e)) from e

    @staticmethod
    def _to_raw_commit(commit: Commit) -> RawCommit:
        """Convert a GitPython Commit into a RawCommit.

        Args:
            commit: GitPython Commit object

        Returns:
            RawCommit object
        """
        return RawCommit(
            id=commit.hexsha,
            timestamp=datetime.fromtimestamp(commit.authored_date, tz=timezone.utc),
            message=commit.message,
        )
