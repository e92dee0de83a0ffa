"""Blame model and identifier exceptions: missing keys, scheme mismatches."""

from .base import BlamelineError


class NotFoundError(BlamelineError):
    """Base class for lookups that found nothing."""

    pass


class BlameNotFoundError(NotFoundError):
    """Raised when a line, commit or author is not part of a blame model.

    Line lookups fail for numbers past the end of the file. Commit and
    author lookups only fail for keys taken from another model.
    """

    def __init__(self, kind: str, key: str):
        super().__init__(
            f"No {kind} '{key}' in blame",
            details={"kind": kind, "key": key},
        )
        self.kind = kind
        self.key = key


class ScopeMismatchError(BlamelineError):
    """Raised when an identifier is decoded with the wrong kind."""

    def __init__(self, expected: str, actual: str):
        super().__init__(
            f"Identifier scheme mismatch: expected '{expected}', got '{actual}'",
            details={"expected": expected, "actual": actual},
        )
        self.expected = expected
        self.actual = actual


class InvalidIdentifierError(BlamelineError):
    """Raised when an identifier cannot be split into scheme, label and payload."""

    def __init__(self, identifier: str, reason: str):
        super().__init__(
            "Invalid identifier",
            details={"identifier": identifier, "reason": reason},
        )
        self.identifier = identifier
        self.reason = reason
