"""Remote listing command."""

import json

import typer
from rich.markup import escape
from rich.table import Table

from ..exceptions import BlamelineError
from . import app
from ._common import console, fail, make_service, remote_to_dict, run


@app.command()
def remotes(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Output in machine-readable JSON format"),
):
    """List the repository's remotes, merged by domain and path."""
    service = make_service(ctx)

    try:
        result = run(service.get_remotes())
    except BlamelineError as e:
        fail(e, json_output)

    if json_output:
        print(json.dumps([remote_to_dict(r) for r in result], indent=2))
        return

    if not result:
        console.print("[yellow]No remotes configured[/yellow]")
        return

    table = Table(title="Remotes")
    table.add_column("Name", style="cyan")
    table.add_column("Domain")
    table.add_column("Path")
    table.add_column("Types")
    for remote in result:
        kinds = ", ".join(t.type for t in remote.types)
        table.add_row(escape(remote.name), escape(remote.domain), escape(remote.path), kinds)
    console.print(table)
