"""Group blame records into a :class:`Blame` model."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable

from ..logging_config import get_logger
from .models import Author, Blame, Commit, CommitLine
from .parser import BlameRecord

logger = get_logger(__name__)


def sort_authors(authors: Iterable[Author]) -> dict[str, Author]:
    """Order authors by line count, most lines first. Ties keep input order."""
    ordered = sorted(authors, key=lambda a: a.line_count, reverse=True)
    return {a.name: a for a in ordered}


def sort_commits(commits: Iterable[Commit]) -> dict[str, Commit]:
    """Order commits by date, newest first. Ties keep input order."""
    ordered = sorted(commits, key=lambda c: c.date, reverse=True)
    return {c.sha: c for c in ordered}


def count_authors(commits: Iterable[Commit]) -> dict[str, Author]:
    """Author line counts summed over ``commits``, in first-seen order."""
    authors: dict[str, Author] = {}
    for commit in commits:
        author = authors.get(commit.author)
        if author is None:
            author = authors[commit.author] = Author(name=commit.author)
        author.line_count += len(commit.lines)
    return authors


def build_blame(
    records: Iterable[BlameRecord], file_name: str, include_content: bool = True
) -> Blame:
    """Build the authorship model of ``file_name`` from its blame records.

    The first record seen for a sha decides that commit's author and date.
    A line gets ``original_file_name`` only when ``file_name`` does not end
    with the path git reported for it (case-insensitive), i.e. the line was
    carried over from a renamed or moved file.
    """
    authors: dict[str, Author] = {}
    commits: dict[str, Commit] = {}
    lines: list[CommitLine] = []

    lowered_file_name = file_name.lower()

    for record in records:
        author_name = record.author.strip()
        if author_name not in authors:
            authors[author_name] = Author(name=author_name)

        commit = commits.get(record.sha)
        if commit is None:
            commit = Commit(
                sha=record.sha,
                file_name=file_name,
                author=author_name,
                date=record.date,
            )
            commits[record.sha] = commit

        line = CommitLine(
            sha=record.sha,
            line=record.line - 1,
            original_line=record.original_line - 1,
            content=record.content if include_content else None,
        )

        original_file_name = record.original_file_name.strip()
        if not lowered_file_name.endswith(original_file_name.lower()):
            line.original_file_name = original_file_name

        commit.lines.append(line)
        lines.append(line)

    for author_name, author in count_authors(commits.values()).items():
        authors[author_name].line_count = author.line_count

    logger.debug(
        "Built blame for %s: %d lines, %d commits, %d authors",
        file_name,
        len(lines),
        len(commits),
        len(authors),
    )

    return Blame(
        authors=sort_authors(authors.values()),
        commits=sort_commits(commits.values()),
        lines=lines,
    )


def with_commit_messages(blame: Blame, messages: dict[str, str]) -> Blame:
    """Copy of ``blame`` whose commits carry their subject from ``messages``.

    ``messages`` is keyed like :attr:`Commit.sha`. Commits without an entry
    keep their current message. The input model is not modified.
    """
    commits = {
        sha: replace(commit, message=messages.get(sha, commit.message))
        for sha, commit in blame.commits.items()
    }
    return replace(blame, commits=commits)
