"""Tests for the git command runner against real repositories."""

import asyncio
import os
import shutil
import subprocess

import pytest

from blameline.blame.aggregator import build_blame
from blameline.blame.parser import BlameRecords, parse_commit_messages
from blameline.config import BlameConfig
from blameline.exceptions import GitCommandError, GitNotFoundError, GitOutputTooLargeError
from blameline.git.remotes import parse_remotes
from blameline.git.runner import GitRunner
from blameline.service import GitService

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not found")


def _git(repo, *args, date="2020-01-01T10:00:00+00:00", author="Alice"):
    env = dict(
        os.environ,
        GIT_AUTHOR_NAME=author,
        GIT_AUTHOR_EMAIL=f"{author.lower()}@example.com",
        GIT_AUTHOR_DATE=date,
        GIT_COMMITTER_NAME=author,
        GIT_COMMITTER_EMAIL=f"{author.lower()}@example.com",
        GIT_COMMITTER_DATE=date,
    )
    result = subprocess.run(
        ["git", "-C", str(repo), *args], capture_output=True, text=True, env=env
    )
    assert result.returncode == 0, result.stderr
    return result.stdout


@pytest.fixture
def repo(tmp_path):
    """Repository with app.py written by Alice, then one line changed by Bob."""
    root = tmp_path / "repo"
    root.mkdir()
    _git(root, "init", "-q")
    (root / "app.py").write_text("import os\nprint('one')\nprint('two')\n")
    _git(root, "add", "app.py")
    _git(root, "commit", "-q", "-m", "Initial import")
    (root / "app.py").write_text("import os\nprint('ONE')\nprint('two')\n")
    _git(
        root,
        "commit",
        "-q",
        "-am",
        "Shout",
        date="2021-06-15T08:30:00+02:00",
        author="Bob",
    )
    _git(root, "remote", "add", "origin", "git@github.com:user/repo.git")
    return root


@requires_git
class TestGitRunner:
    """Tests for GitRunner."""

    def test_blame_output_parses(self, repo):
        output = asyncio.run(GitRunner().blame("app.py", str(repo)))
        blame = build_blame(BlameRecords(output), "app.py")

        assert len(blame.lines) == 3
        assert [a.name for a in blame.authors.values()] == ["Alice", "Bob"]
        assert blame.authors["Alice"].line_count == 2
        newest = next(iter(blame.commits.values()))
        assert newest.author == "Bob"
        assert blame.lines[1].content == "print('ONE')"
        assert all(len(sha) == 8 for sha in blame.commits)

    def test_commit_messages(self, repo):
        output = asyncio.run(GitRunner().commit_messages("app.py", str(repo)))
        messages = parse_commit_messages(output)
        assert list(messages.values()) == ["Shout", "Initial import"]

    def test_commit_message(self, repo):
        sha = _git(repo, "rev-parse", "HEAD").strip()
        message = asyncio.run(GitRunner().commit_message(sha, str(repo)))
        assert message == "Shout"

    def test_remotes(self, repo):
        output = asyncio.run(GitRunner().remotes(str(repo)))
        remotes = parse_remotes(output, str(repo))
        assert len(remotes) == 1
        assert remotes[0].uniqueness == "github.com/user/repo"
        assert len(remotes[0].types) == 2

    def test_repo_path(self, repo):
        (repo / "sub").mkdir()
        top = asyncio.run(GitRunner().repo_path(str(repo / "sub")))
        assert os.path.realpath(top) == os.path.realpath(repo)

    def test_failure_raises(self, repo):
        with pytest.raises(GitCommandError) as exc_info:
            asyncio.run(GitRunner().blame("missing.py", str(repo)))
        assert exc_info.value.returncode != 0

    def test_oversized_blame_raises(self, repo):
        """A blame that does not fit is an error, never a partial model."""
        runner = GitRunner(BlameConfig(max_output_mb=0.00001))
        with pytest.raises(GitOutputTooLargeError) as exc_info:
            asyncio.run(runner.blame("app.py", str(repo)))
        assert exc_info.value.size_bytes > exc_info.value.limit_bytes

    def test_oversized_log_truncated(self, repo):
        runner = GitRunner(BlameConfig(max_output_mb=0.00001))
        output = asyncio.run(runner.commit_messages("app.py", str(repo)))
        assert len(output.encode()) <= 11

    def test_message_keys_match_blame_shas(self, repo):
        runner = GitRunner()
        blame_output = asyncio.run(runner.blame("app.py", str(repo)))
        log_output = asyncio.run(runner.commit_messages("app.py", str(repo)))

        blame = build_blame(BlameRecords(blame_output), "app.py")
        messages = parse_commit_messages(log_output)
        assert set(blame.commits) <= set(messages)

    def test_service_fills_messages_and_evicts_oversized_blame(self, repo):
        service = GitService(str(repo))
        blame = asyncio.run(service.get_blame_with_messages("app.py"))
        assert sorted(c.message for c in blame.commits.values()) == ["Initial import", "Shout"]

        small = GitService(str(repo), config=BlameConfig(max_output_mb=0.00001))
        with pytest.raises(GitOutputTooLargeError):
            asyncio.run(small.get_blame_for_file("app.py"))
        assert "app.py" not in small._blames


class TestGitRunnerWithoutGit:
    def test_missing_executable(self, tmp_path):
        runner = GitRunner(BlameConfig(git_path="definitely-not-git-xyz"))
        with pytest.raises(GitNotFoundError):
            asyncio.run(runner.remotes(str(tmp_path)))
