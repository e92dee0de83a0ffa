"""Derive partial views of a :class:`Blame` for a line range.

Nothing here touches the cache: every function takes a full blame model and
returns new objects (or the model itself when the range covers it).
"""

from __future__ import annotations

from dataclasses import replace

from . import uri
from .aggregator import count_authors, sort_authors, sort_commits
from .models import Blame, BlameLine, BlameLines, CommitLine, Location, Position, Range


def _bounds(range: Range) -> tuple[int, int]:
    # negative lines would index from the end of the list
    return max(range.start.line, 0), range.end.line


def _slice(lines: list[CommitLine], start: int, end: int) -> list[CommitLine]:
    return lines[start : end + 1] if end >= start else []


def get_blame_for_range(blame: Blame, range: Range) -> Blame:
    """Restrict ``blame`` to the lines ``range.start.line..range.end.line``."""
    if not blame.lines:
        return blame

    start, end = _bounds(range)
    if start == 0 and end == len(blame.lines) - 1:
        return blame

    lines = _slice(blame.lines, start, end)
    shas = {line.sha for line in lines}

    commits = [
        replace(c, lines=[line for line in c.lines if start <= line.line <= end])
        for c in blame.commits.values()
        if c.sha in shas
    ]

    return Blame(
        authors=sort_authors(count_authors(commits).values()),
        commits=sort_commits(commits),
        lines=lines,
    )


def get_blame_for_sha_range(blame: Blame, sha: str, range: Range) -> BlameLines:
    """Lines of one commit inside ``range``; counts cover only those lines."""
    commit = blame.get_commit(sha)
    lines = [line for line in _slice(blame.lines, *_bounds(range)) if line.sha == sha]
    author = blame.get_author(commit.author)
    return BlameLines(
        author=replace(author, line_count=len(lines)),
        commit=replace(commit, lines=lines),
        lines=lines,
    )


def get_blame_for_line(blame: Blame, line: int) -> BlameLine:
    """Attribution of a single line; the author count is the commit's full count."""
    commit_line = blame.get_line(line)
    commit = blame.get_commit(commit_line.sha)
    author = blame.get_author(commit.author)
    return BlameLine(
        author=replace(author, line_count=len(commit.lines)),
        commit=commit,
        line=commit_line,
    )


def get_blame_locations(blame: Blame, range: Range) -> list[Location]:
    """One location per blamed line in ``range``, pointing into its commit.

    Commits are numbered from 1 in their sorted order; the number is encoded
    in each identifier so consumers can list them in that order.
    """
    projected = get_blame_for_range(blame, range)
    commit_count = len(projected.commits)

    locations: list[Location] = []
    for index, commit in enumerate(projected.commits.values(), start=1):
        commit_uri = uri.to_blame_uri(commit, index, commit_count, range)
        for line in commit.lines:
            line_uri = (
                uri.to_blame_uri(commit, index, commit_count, range, line.original_file_name)
                if line.original_file_name
                else commit_uri
            )
            locations.append(Location(line_uri, Position(line.original_line, 0)))

    return locations

