"""Encode and decode identifiers naming one commit's revision of a file.

An identifier has the shape ``<scheme>:<label>?<payload>``:

* ``scheme`` is ``git`` for a plain commit address or ``gitblame`` for a
  commit address scoped to a line range.
* ``label`` is for display only, e.g.
  ``02. Alice, Jan 1, 2020 10:00 AM - src/a1b2c3d4: app.py``. The zero-padded
  index makes an alphabetical listing follow blame order. It is never parsed.
* ``payload`` is percent-quoted JSON carrying everything needed to decode.

Identifiers are opaque to callers: build them with :func:`to_git_uri` /
:func:`to_blame_uri` and read them back with :func:`from_git_uri` /
:func:`from_blame_uri` (or :func:`decode`).
"""

from __future__ import annotations

import json
import posixpath
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional
from urllib.parse import quote, unquote

from ..exceptions import InvalidIdentifierError, ScopeMismatchError
from .models import Commit, Position, Range


class UriKind(Enum):
    GIT = "git"
    GIT_BLAME = "gitblame"


@dataclass(frozen=True)
class UriData:
    file_name: str
    sha: str
    index: int
    original_file_name: Optional[str] = None
    range: Optional[Range] = None  # present only for GIT_BLAME


@dataclass(frozen=True)
class ScopeMismatch:
    expected: UriKind
    actual: str

    def to_error(self) -> ScopeMismatchError:
        return ScopeMismatchError(self.expected.value, self.actual)


@dataclass(frozen=True)
class DecodeResult:
    """Outcome of :func:`decode`: either ``data`` or a ``mismatch``."""

    data: Optional[UriData] = None
    mismatch: Optional[ScopeMismatch] = None

    @property
    def ok(self) -> bool:
        return self.mismatch is None

    def unwrap(self) -> UriData:
        if self.mismatch is not None:
            raise self.mismatch.to_error()
        if self.data is None:
            raise ValueError("DecodeResult holds neither data nor a mismatch")
        return self.data


def format_date(commit: Commit) -> str:
    d = commit.date
    return f"{d:%b} {d.day}, {d:%Y %I:%M %p}"


def _label(commit: Commit, data: UriData, commit_count: int) -> str:
    width = len(str(commit_count))
    file_name = data.original_file_name or data.file_name
    directory = posixpath.dirname(file_name) or "."
    base = posixpath.basename(file_name)
    return (
        f"{data.index:0{width}d}. {commit.author}, {format_date(commit)}"
        f" - {directory}/{commit.sha}: {base}"
    )


def _position_to_json(position: Position) -> dict[str, int]:
    return {"line": position.line, "character": position.character}


def _payload(data: UriData) -> str:
    body: dict[str, Any] = {"fileName": data.file_name, "sha": data.sha, "index": data.index}
    if data.original_file_name:
        body["originalFileName"] = data.original_file_name
    if data.range is not None:
        body["range"] = [_position_to_json(data.range.start), _position_to_json(data.range.end)]
    return quote(json.dumps(body, separators=(",", ":")), safe="")


def encode(
    kind: UriKind,
    commit: Commit,
    index: int,
    commit_count: int,
    original_file_name: Optional[str] = None,
    range: Optional[Range] = None,
) -> str:
    """Build the identifier of ``commit`` at display ``index`` of ``commit_count``."""
    if kind is UriKind.GIT_BLAME and range is None:
        raise ValueError("gitblame identifiers require a range")
    if kind is UriKind.GIT and range is not None:
        raise ValueError("git identifiers cannot carry a range")

    data = UriData(
        file_name=commit.file_name,
        sha=commit.sha,
        index=index,
        original_file_name=original_file_name or None,
        range=range,
    )
    return f"{kind.value}:{_label(commit, data, commit_count)}?{_payload(data)}"


def to_git_uri(
    commit: Commit, index: int, commit_count: int, original_file_name: Optional[str] = None
) -> str:
    return encode(UriKind.GIT, commit, index, commit_count, original_file_name)


def to_blame_uri(
    commit: Commit,
    index: int,
    commit_count: int,
    range: Range,
    original_file_name: Optional[str] = None,
) -> str:
    return encode(UriKind.GIT_BLAME, commit, index, commit_count, original_file_name, range)


def scheme_of(identifier: str) -> str:
    scheme, sep, _ = identifier.partition(":")
    if not sep:
        raise InvalidIdentifierError(identifier, "missing scheme")
    return scheme


def _position_from_json(value: Any) -> Position:
    return Position(int(value["line"]), int(value["character"]))


def decode(identifier: str, kind: UriKind) -> DecodeResult:
    """Decode ``identifier`` expecting ``kind``.

    A kind mismatch is returned as a :class:`ScopeMismatch`; a string that is
    not an identifier at all raises :class:`InvalidIdentifierError`.
    """
    scheme = scheme_of(identifier)
    if scheme != kind.value:
        return DecodeResult(mismatch=ScopeMismatch(expected=kind, actual=scheme))

    # The payload is percent-quoted, so the last "?" always starts it
    _, sep, payload = identifier.rpartition("?")
    if not sep:
        raise InvalidIdentifierError(identifier, "missing payload")

    try:
        body = json.loads(unquote(payload))
        range_value: Optional[Range] = None
        if kind is UriKind.GIT_BLAME:
            start, end = body["range"]
            range_value = Range(_position_from_json(start), _position_from_json(end))
        data = UriData(
            file_name=body["fileName"],
            sha=body["sha"],
            index=int(body["index"]),
            original_file_name=body.get("originalFileName"),
            range=range_value,
        )
    except (ValueError, KeyError, TypeError) as e:
        raise InvalidIdentifierError(identifier, f"malformed payload: {e}")

    return DecodeResult(data=data)


def from_git_uri(identifier: str) -> UriData:
    """Decode a ``git`` identifier, raising :class:`ScopeMismatchError` otherwise."""
    return decode(identifier, UriKind.GIT).unwrap()


def from_blame_uri(identifier: str) -> UriData:
    """Decode a ``gitblame`` identifier, raising :class:`ScopeMismatchError` otherwise."""
    return decode(identifier, UriKind.GIT_BLAME).unwrap()

