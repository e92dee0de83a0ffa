"""Data models for blame (per-line authorship) analysis."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..exceptions import BlameNotFoundError


@dataclass(frozen=True)
class Position:
    line: int  # 0-based
    character: int = 0


@dataclass(frozen=True)
class Range:
    start: Position
    end: Position

    @classmethod
    def from_lines(cls, start_line: int, end_line: int) -> Range:
        """Range spanning whole lines ``start_line`` through ``end_line`` inclusive."""
        return cls(Position(start_line, 0), Position(end_line, 0))

    def contains_line(self, line: int) -> bool:
        return self.start.line <= line <= self.end.line


@dataclass
class Author:
    name: str
    line_count: int = 0


@dataclass
class CommitLine:
    sha: str
    line: int  # 0-based line in the current file
    original_line: int  # 0-based line in the file as of `sha`
    original_file_name: Optional[str] = None  # set only when the line came from another path
    content: Optional[str] = None


@dataclass
class Commit:
    sha: str
    file_name: str
    author: str
    date: datetime  # timezone-aware
    lines: list[CommitLine] = field(default_factory=list)
    message: Optional[str] = None


@dataclass
class Blame:
    """Authorship of every line of one file.

    ``authors`` is ordered by line count descending and ``commits`` by date
    descending; ``lines`` holds one entry per physical line in file order.
    """

    authors: dict[str, Author] = field(default_factory=dict)
    commits: dict[str, Commit] = field(default_factory=dict)
    lines: list[CommitLine] = field(default_factory=list)

    def get_commit(self, sha: str) -> Commit:
        try:
            return self.commits[sha]
        except KeyError:
            raise BlameNotFoundError("commit", sha) from None

    def get_author(self, name: str) -> Author:
        try:
            return self.authors[name]
        except KeyError:
            raise BlameNotFoundError("author", name) from None

    def get_line(self, line: int) -> CommitLine:
        if not 0 <= line < len(self.lines):
            raise BlameNotFoundError("line", str(line))
        return self.lines[line]


@dataclass
class BlameLine:
    author: Author
    commit: Commit
    line: CommitLine


@dataclass
class BlameLines:
    author: Author
    commit: Commit
    lines: list[CommitLine]


@dataclass(frozen=True)
class Location:
    uri: str  # opaque identifier, see blame.uri
    position: Position
