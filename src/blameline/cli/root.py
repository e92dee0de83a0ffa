"""Root callback: global options shared by every subcommand."""

from pathlib import Path
from typing import Optional

import typer

from ..config import load_config
from ..exceptions import BlamelineError
from ..logging_config import setup_logging
from . import app
from ._common import console, fail


@app.callback(invoke_without_command=True, no_args_is_help=True)
def main(
    ctx: typer.Context,
    path: Optional[Path] = typer.Option(
        None,
        "-C",
        "--path",
        help="Repository root (default: current directory)",
        exists=True,
        file_okay=False,
        dir_okay=True,
        readable=True,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file", help="Also append log records to this file", dir_okay=False
    ),
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
):
    """
    Inspect line authorship of files in a git repository.

    [bold cyan]Examples:[/bold cyan]

      blameline blame src/app.py

      blameline blame src/app.py --start 10 --end 20 --json

      blameline remotes
    """
    if version:
        from .. import __version__

        console.print(f"[bold cyan]blameline[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)

    try:
        settings = load_config(config_file=config, verbose=verbose, quiet=quiet)
    except BlamelineError as e:
        fail(e)

    setup_logging(
        verbose=settings.verbosity == "verbose",
        quiet=settings.verbosity == "quiet",
        log_file=str(log_file) if log_file else None,
    )

    ctx.ensure_object(dict)
    ctx.obj["path"] = Path(path) if path else Path.cwd()
    ctx.obj["config"] = settings
