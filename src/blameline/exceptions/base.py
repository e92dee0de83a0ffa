"""Base exception for blameline."""

from typing import Any, Dict, Optional


class BlamelineError(Exception):
    """Base exception for all blameline errors.

    ``details`` holds string fields describing the failure (the key, the git
    command, the offending value). They are appended to ``str(error)`` and
    reported separately by :meth:`to_dict` for ``--json`` output.
    """

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        return {"error": type(self).__name__, "message": self.message, "details": self.details}
