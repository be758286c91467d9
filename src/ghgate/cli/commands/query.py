"""Commands that query GitHub through the credential gate."""

from collections.abc import Callable
from typing import Annotated

import typer
from rich.console import Console

from ghgate.cli.errors import format_result
from ghgate.cli.progress import api_spinner
from ghgate.cli.utils import handle_api_errors
from ghgate.services import (
    get_credential_gate,
    repository_description_message,
    viewer_email_message,
    viewer_name_message,
)

console = Console()


def _with_spinner(message: str, operation: Callable[[str], str]) -> Callable[[str], str]:
    """Show the spinner only while the query runs, not during a login."""

    def run(token: str) -> str:
        with api_spinner(message):
            return operation(token)

    return run


@handle_api_errors
def viewer():
    """
    Show the name of the authenticated user.

    Works with any valid token.
    """
    gate = get_credential_gate()
    message = gate.ensure(_with_spinner("Querying GitHub...", viewer_name_message))
    format_result(message, console)


@handle_api_errors
def email():
    """
    Show the name and public email of the authenticated user.

    Needs the 'user:email' or 'read:user' scope; a token without it
    triggers re-authentication.
    """
    gate = get_credential_gate()
    message = gate.ensure(_with_spinner("Querying GitHub...", viewer_email_message))
    format_result(message, console)


@handle_api_errors
def repo(
    owner: Annotated[str, typer.Argument(help="Repository owner")] = "github",
    name: Annotated[str, typer.Argument(help="Repository name")] = "VisualStudio",
):
    """
    Show a repository description.

    Repositories of organizations that enforce SAML single sign-on need a
    token authorized for that organization.

    Examples:
        ghgate repo
        ghgate repo github hubbers
    """
    gate = get_credential_gate()
    message = gate.ensure(
        _with_spinner(
            f"Fetching {owner}/{name}...",
            lambda token: repository_description_message(token, owner, name),
        )
    )
    format_result(message, console)
