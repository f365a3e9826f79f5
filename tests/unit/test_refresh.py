"""Tests for tag refresh and pull outcome classification."""

import tempfile
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock

import git
import pytest

from tagdelta.errors import RefreshError
from tagdelta.extraction import RefreshStatus, TagRefresher, classify_pull_outcome


class TestClassifyPullOutcome:
    """Test the outcome classifier."""

    @pytest.mark.parametrize(
        "message",
        [
            "Already up to date.",
            "From github.com:org/repo\n * [new tag]         prd-v3     -> prd-v3",
            " * [new tag] uat-v9 -> uat-v9",
        ],
    )
    def test_benign_messages_are_success(self, message):
        outcome = classify_pull_outcome(message)
        assert outcome.status is RefreshStatus.SUCCESS
        assert outcome.ok

    @pytest.mark.parametrize(
        "message",
        [
            "fatal: Authentication failed for 'https://example.com/repo.git/'",
            "fatal: unable to access 'https://example.com/': Could not resolve host: example.com",
            "git@github.com: Permission denied (publickey).\nfatal: Could not read from remote repository.",
            "There is no tracking information for the current branch.",
            "",
        ],
    )
    def test_other_messages_are_failure(self, message):
        outcome = classify_pull_outcome(message)
        assert outcome.status is RefreshStatus.FAILURE
        assert not outcome.ok

    def test_transport_failure_wins_over_success_phrase(self):
        message = "From github.com:org/repo\nfatal: unable to access remote: Could not resolve host"
        assert not classify_pull_outcome(message).ok


def _mock_repo(tag_names):
    repo = MagicMock()
    repo.tags = [SimpleNamespace(name=name) for name in tag_names]
    return repo


class TestTagRefresherWithMockRepo:
    """Test TagRefresher against a mocked repository."""

    def test_deletes_every_tag_then_pulls(self):
        repo = _mock_repo(["v1", "v2"])
        repo.git.pull.return_value = "Already up to date."

        outcome = TagRefresher(Path("/repo"), repo=repo).resync_all_tags()

        assert outcome.ok
        assert outcome.tags_deleted == 2
        repo.git.tag.assert_any_call("-d", "v1")
        repo.git.tag.assert_any_call("-d", "v2")
        repo.git.pull.assert_called_once_with("--prune", "--tags")

    def test_individual_delete_failure_is_skipped(self):
        repo = _mock_repo(["v1", "v2", "v3"])
        repo.git.tag.side_effect = [None, git.GitCommandError("tag", 1, stderr="error"), None]
        repo.git.pull.return_value = ""

        outcome = TagRefresher(Path("/repo"), repo=repo).resync_all_tags()

        assert outcome.ok
        assert outcome.tags_deleted == 2
        repo.git.pull.assert_called_once()

    def test_benign_pull_error_is_success(self):
        repo = _mock_repo([])
        repo.git.pull.side_effect = git.GitCommandError(
            ["git", "pull"], 1, stderr="From github.com:org/repo\n * [new tag] v9 -> v9"
        )
        outcome = TagRefresher(Path("/repo"), repo=repo).resync_all_tags()
        assert outcome.ok

    def test_real_pull_error_is_failure(self):
        repo = _mock_repo(["v1"])
        repo.git.pull.side_effect = git.GitCommandError(
            ["git", "pull"], 128, stderr="fatal: Authentication failed for 'https://example.com/'"
        )
        outcome = TagRefresher(Path("/repo"), repo=repo).resync_all_tags()
        assert not outcome.ok
        assert "Authentication failed" in outcome.message
        assert outcome.tags_deleted == 1

    def test_refresh_raises_on_failure(self):
        repo = _mock_repo([])
        repo.git.pull.side_effect = git.GitCommandError(
            ["git", "pull"], 128, stderr="fatal: Could not read from remote repository."
        )
        with pytest.raises(RefreshError, match="Tag refresh failed"):
            TagRefresher(Path("/repo"), repo=repo).refresh()


@pytest.fixture
def origin_and_clone():
    """Create an origin repository with tags and a clone of it."""
    with tempfile.TemporaryDirectory() as tmpdir:
        origin_path = Path(tmpdir) / "origin"
        origin_path.mkdir()
        origin = git.Repo.init(origin_path)
        origin.config_writer().set_value("user", "name", "Test User").release()
        origin.config_writer().set_value("user", "email", "test@example.com").release()

        (origin_path / "README.md").write_text("# Origin\n")
        origin.index.add(["README.md"])
        first = origin.index.commit("Initial commit")
        origin.create_tag("prd-v1", ref=first)
        origin.create_tag("old-tag", ref=first)

        clone = git.Repo.clone_from(str(origin_path), str(Path(tmpdir) / "clone"))
        yield origin, clone


def test_resync_mirrors_remote_tags(origin_and_clone):
    origin, clone = origin_and_clone

    origin.delete_tag(origin.tags["old-tag"])
    origin.create_tag("prd-v2", ref=origin.head.commit)
    clone.create_tag("local-only", ref=clone.head.commit)

    outcome = TagRefresher(Path(clone.working_tree_dir), repo=clone).resync_all_tags()

    assert outcome.ok
    assert sorted(tag.name for tag in clone.tags) == ["prd-v1", "prd-v2"]


def test_resync_is_idempotent(origin_and_clone):
    _, clone = origin_and_clone
    refresher = TagRefresher(Path(clone.working_tree_dir), repo=clone)

    assert refresher.resync_all_tags().ok
    first = sorted(tag.name for tag in clone.tags)
    assert refresher.resync_all_tags().ok
    assert sorted(tag.name for tag in clone.tags) == first
