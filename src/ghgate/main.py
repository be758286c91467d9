"""Main CLI entry point for ghgate."""

from typing import Annotated

import typer

from ghgate.cli.commands import query, status
from ghgate.cli.utils import configure_logging

app = typer.Typer(
    name="ghgate",
    help="Run GitHub queries with the token from your credential store",
    no_args_is_help=True,
)

app.command("viewer")(query.viewer)
app.command("email")(query.email)
app.command("repo")(query.repo)
app.command("status")(status.status)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging"),
    ] = False,
):
    """Run GitHub queries with the token from your credential store."""
    configure_logging(verbose)


if __name__ == "__main__":
    app()
