"""Exception hierarchy for blameline."""

from .base import BlamelineError
from .blame import (
    BlameNotFoundError,
    InvalidIdentifierError,
    NotFoundError,
    ScopeMismatchError,
)
from .config import ConfigurationError, InvalidConfigError, InvalidPathError
from .git import (
    GitCommandError,
    GitError,
    GitNotFoundError,
    GitOutputTooLargeError,
    GitTimeoutError,
)

__all__ = [
    "BlamelineError",
    "NotFoundError",
    "BlameNotFoundError",
    "ScopeMismatchError",
    "InvalidIdentifierError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
    "GitError",
    "GitNotFoundError",
    "GitCommandError",
    "GitTimeoutError",
    "GitOutputTooLargeError",
]
