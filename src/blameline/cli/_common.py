"""Shared CLI helpers."""

import asyncio
import json
from pathlib import Path
from typing import Any, Coroutine, NoReturn, TypeVar

import typer
from rich.console import Console
from rich.markup import escape

from ..blame.models import Blame, Commit, CommitLine
from ..config import BlameConfig
from ..exceptions import BlamelineError
from ..git.remotes import Remote
from ..service import GitService

console = Console()

T = TypeVar("T")


def run(coro: Coroutine[Any, Any, T]) -> T:
    return asyncio.run(coro)


def make_service(ctx: typer.Context) -> GitService:
    """Build a GitService from the options stored by the root callback."""
    obj = ctx.ensure_object(dict)
    repo: Path = obj.get("path", Path.cwd())
    config: BlameConfig = obj.get("config", BlameConfig())
    return GitService(str(repo.resolve()), config=config)


def line_to_dict(line: CommitLine) -> dict[str, Any]:
    data: dict[str, Any] = {
        "sha": line.sha,
        "line": line.line,
        "original_line": line.original_line,
    }
    if line.original_file_name:
        data["original_file_name"] = line.original_file_name
    if line.content is not None:
        data["content"] = line.content
    return data


def commit_to_dict(commit: Commit) -> dict[str, Any]:
    data: dict[str, Any] = {
        "sha": commit.sha,
        "file_name": commit.file_name,
        "author": commit.author,
        "date": commit.date.isoformat(),
        "line_count": len(commit.lines),
    }
    if commit.message is not None:
        data["message"] = commit.message
    return data


def blame_to_dict(blame: Blame) -> dict[str, Any]:
    return {
        "authors": [{"name": a.name, "line_count": a.line_count} for a in blame.authors.values()],
        "commits": [commit_to_dict(c) for c in blame.commits.values()],
        "lines": [line_to_dict(line) for line in blame.lines],
    }


def remote_to_dict(remote: Remote) -> dict[str, Any]:
    return {
        "name": remote.name,
        "uniqueness": remote.uniqueness,
        "scheme": remote.scheme,
        "domain": remote.domain,
        "path": remote.path,
        "types": [{"url": t.url, "type": t.type} for t in remote.types],
    }


def fail(error: BlamelineError, json_output: bool = False) -> NoReturn:
    """Report ``error`` on the console (or as JSON) and exit with status 1."""
    if json_output:
        print(json.dumps(error.to_dict(), indent=2))
    else:
        console.print(f"[red]Error:[/red] {escape(str(error))}")
    raise typer.Exit(1)
