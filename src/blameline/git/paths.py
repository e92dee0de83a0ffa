"""Repository-relative path normalization."""

from __future__ import annotations

import os
from pathlib import Path

from ..exceptions import InvalidPathError


def normalize_path(file_name: str, repo_path: str) -> str:
    """Canonical, forward-slash form of ``file_name`` relative to ``repo_path``.

    Relative names are taken relative to the repository root and symlinks
    are resolved, so every spelling of one file yields the same string.
    Files outside the repository keep their resolved absolute path.
    """
    if not file_name:
        raise InvalidPathError(Path(file_name), "empty file name")

    root = Path(os.path.realpath(repo_path)) if repo_path else None
    path = Path(file_name)
    if not path.is_absolute() and root is not None:
        path = root / path
    resolved = Path(os.path.realpath(path))

    if root is not None:
        try:
            return resolved.relative_to(root).as_posix()
        except ValueError:
            pass
    return resolved.as_posix()
