"""CLI entry point. Importing the command modules registers them on the app."""

import typer

app = typer.Typer(
    name="blameline",
    help="blameline - line authorship from git blame",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .root import main as _main_callback  # noqa: F401, E402
from .blame import blame as _blame, line as _line, locations as _locations  # noqa: F401, E402
from .remotes import remotes as _remotes  # noqa: F401, E402


def main() -> None:
    app()
