"""Blame commands: whole-file, single-line and location views."""

import json
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from ..blame.models import Blame, Range
from ..blame.projection import get_blame_for_range
from ..blame.uri import format_date
from ..exceptions import BlamelineError
from . import app
from ._common import blame_to_dict, console, fail, line_to_dict, make_service, run


def _print_blame(blame: Blame, title: str) -> None:
    total = len(blame.lines)

    authors = Table(title=f"Authors of {escape(title)}", show_lines=False)
    authors.add_column("Author", style="cyan")
    authors.add_column("Lines", justify="right")
    authors.add_column("Share", justify="right")
    for author in blame.authors.values():
        share = author.line_count / total if total else 0.0
        authors.add_row(escape(author.name), str(author.line_count), f"{share:.0%}")
    console.print(authors)

    commits = Table(title="Commits", show_lines=False)
    commits.add_column("Sha", style="yellow")
    commits.add_column("Author", style="cyan")
    commits.add_column("Date")
    commits.add_column("Lines", justify="right")
    show_messages = any(c.message is not None for c in blame.commits.values())
    if show_messages:
        commits.add_column("Message")
    for commit in blame.commits.values():
        row = [commit.sha, escape(commit.author), format_date(commit), str(len(commit.lines))]
        if show_messages:
            row.append(escape(commit.message or ""))
        commits.add_row(*row)
    console.print(commits)


@app.command()
def blame(
    ctx: typer.Context,
    file: str = typer.Argument(..., help="File to blame, relative to the repository root"),
    start: Optional[int] = typer.Option(None, "--start", "-s", help="First line (0-based)", min=0),
    end: Optional[int] = typer.Option(None, "--end", "-e", help="Last line (0-based, inclusive)", min=0),
    messages: bool = typer.Option(False, "--messages", "-m", help="Include commit subjects"),
    json_output: bool = typer.Option(False, "--json", help="Output in machine-readable JSON format"),
):
    """
    Show who wrote each part of a file.

    [bold cyan]Examples:[/bold cyan]

      blameline blame src/app.py

      blameline blame src/app.py --start 10 --end 20

      blameline blame src/app.py --messages
    """
    service = make_service(ctx)

    async def _load() -> Blame:
        if messages:
            full = await service.get_blame_with_messages(file)
        else:
            full = await service.get_blame_for_file(file)
        if start is None and end is None:
            return full
        first = start if start is not None else 0
        last = end if end is not None else max(len(full.lines) - 1, 0)
        return get_blame_for_range(full, Range.from_lines(first, last))

    try:
        result = run(_load())
    except BlamelineError as e:
        fail(e, json_output)

    if json_output:
        print(json.dumps(blame_to_dict(result), indent=2))
        return

    if not result.lines:
        console.print(f"[yellow]No blame information for {escape(file)}[/yellow]")
        return

    _print_blame(result, file)


@app.command()
def line(
    ctx: typer.Context,
    file: str = typer.Argument(..., help="File to blame, relative to the repository root"),
    number: int = typer.Argument(..., help="Line number (0-based)", min=0),
    json_output: bool = typer.Option(False, "--json", help="Output in machine-readable JSON format"),
):
    """Show the commit and author of a single line."""
    service = make_service(ctx)

    try:
        result = run(service.get_blame_for_line(file, number))
    except BlamelineError as e:
        fail(e, json_output)

    if json_output:
        data = {
            "author": {"name": result.author.name, "line_count": result.author.line_count},
            "commit": {
                "sha": result.commit.sha,
                "date": result.commit.date.isoformat(),
            },
            "line": line_to_dict(result.line),
        }
        print(json.dumps(data, indent=2))
        return

    console.print(
        f"[yellow]{result.commit.sha}[/yellow] [cyan]{escape(result.author.name)}[/cyan] "
        f"{format_date(result.commit)} ({result.author.line_count} lines in this commit)"
    )
    if result.line.original_file_name:
        console.print(f"  from [blue]{escape(result.line.original_file_name)}[/blue]")
    if result.line.content is not None:
        console.print(f"  {escape(result.line.content)}")


@app.command()
def locations(
    ctx: typer.Context,
    file: str = typer.Argument(..., help="File to blame, relative to the repository root"),
    start: int = typer.Argument(..., help="First line (0-based)", min=0),
    end: int = typer.Argument(..., help="Last line (0-based, inclusive)", min=0),
):
    """List the historical location of every line in a range."""
    service = make_service(ctx)

    try:
        result = run(service.get_blame_locations(file, Range.from_lines(start, end)))
    except BlamelineError as e:
        fail(e)

    for location in result:
        print(f"{location.position.line}\t{location.uri}")
