"""Tokenize raw ``git blame`` and one-line ``git log`` output.

Blame output is expected in the layout produced by ``git blame -fn --root``::

    <sha8> <original file> <original line> (<author> <YYYY-MM-DD HH:MM:SS +ZZZZ> <line>)<content>

Lines that do not match are skipped; git may interleave headers or blank
separators that carry no attribution.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Iterator, NamedTuple

_BLAME_RE = re.compile(
    r"^([\^0-9a-fA-F]{8})\s(\S*)\s+([0-9\S]+)\s"
    r"\((.*)\s([0-9]{4}-[0-9]{2}-[0-9]{2}\s[0-9]{2}:[0-9]{2}:[0-9]{2}\s[-+][0-9]{4})"
    r"\s+([0-9]+)\)(.*)$"
)

_COMMIT_MESSAGE_RE = re.compile(r"^([\^0-9a-fA-F]{7,40})\s(.*)$")

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S %z"


class BlameRecord(NamedTuple):
    sha: str
    original_file_name: str
    original_line: int  # 1-based
    author: str  # untrimmed
    date: datetime  # timezone-aware
    line: int  # 1-based
    content: str


def _split_lines(data: str) -> Iterator[str]:
    for line in data.split("\n"):
        yield line.rstrip("\r")


def _strip_separator(content: str) -> str:
    # git prints ") " before the source text
    return content[1:] if content.startswith(" ") else content


class BlameRecords:
    """Restartable sequence of :class:`BlameRecord` over one blame output.

    Every iteration scans ``data`` from the start, so the same instance can
    be consumed repeatedly and several outputs can be parsed interleaved.
    """

    def __init__(self, data: str):
        self.data = data or ""

    def __iter__(self) -> Iterator[BlameRecord]:
        for raw in _split_lines(self.data):
            m = _BLAME_RE.match(raw)
            if m is None:
                continue
            # the pattern only checks the shape of numbers and dates
            try:
                original_line = int(m.group(3))
                line = int(m.group(6))
                date = parse_blame_date(m.group(5))
            except ValueError:
                continue
            yield BlameRecord(
                sha=m.group(1),
                original_file_name=m.group(2),
                original_line=original_line,
                author=m.group(4),
                date=date,
                line=line,
                content=_strip_separator(m.group(7)),
            )


def parse_blame_date(text: str) -> datetime:
    """Parse a blame timestamp with UTC offset into an aware datetime."""
    return datetime.strptime(text.strip(), _DATE_FORMAT)


def parse_commit_messages(data: str) -> dict[str, str]:
    """Map abbreviated sha -> subject from ``git log --format='%h %s'`` output."""
    messages: dict[str, str] = {}
    if not data:
        return messages
    for raw in _split_lines(data):
        m = _COMMIT_MESSAGE_RE.match(raw)
        if m is not None:
            messages[m.group(1)] = m.group(2)
    return messages
