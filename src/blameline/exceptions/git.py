"""Git command exceptions: missing executable, failures, timeouts."""

from typing import Sequence

from .base import BlamelineError


class GitError(BlamelineError):
    """Base class for errors raised while talking to git."""

    pass


class GitNotFoundError(GitError):
    """Raised when the git executable cannot be launched."""

    def __init__(self, git_path: str):
        super().__init__(
            f"git executable not found: {git_path}",
            details={"git_path": git_path},
        )
        self.git_path = git_path


class GitCommandError(GitError):
    """Raised when a git command exits with a non-zero status."""

    def __init__(self, args: Sequence[str], returncode: int, stderr: str):
        command = " ".join(args)
        super().__init__(
            f"git command failed: {command}",
            details={"returncode": str(returncode), "stderr": stderr.strip()},
        )
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class GitTimeoutError(GitError):
    """Raised when a git command runs past its timeout."""

    def __init__(self, args: Sequence[str], timeout_seconds: float):
        command = " ".join(args)
        super().__init__(
            f"git command timed out: {command}",
            details={"timeout_seconds": str(timeout_seconds)},
        )
        self.command = command
        self.timeout_seconds = timeout_seconds


class GitOutputTooLargeError(GitError):
    """Raised when output that must be read whole exceeds the size cap."""

    def __init__(self, args: Sequence[str], size_bytes: int, limit_bytes: int):
        command = " ".join(args)
        super().__init__(
            f"git output too large: {command}",
            details={"size_bytes": str(size_bytes), "limit_bytes": str(limit_bytes)},
        )
        self.command = command
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes
