"""User-friendly error messages with actionable suggestions."""

from dataclasses import dataclass

import httpx
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from ghgate.exceptions import (
    AuthorizationFailure,
    GitHubAPIError,
    NoCredentialError,
    NoReauthTargetAvailableError,
    RateLimitError,
)


@dataclass
class ErrorInfo:
    """Structured error information for display."""

    title: str
    message: str
    suggestion: str
    command: str | None = None


# Error taxonomy
ERROR_MESSAGES = {
    "auth_failure": ErrorInfo(
        title="Not authorized",
        message="GitHub rejected your token for this request.",
        suggestion="The token may lack a scope, or the organization enforces SAML single sign-on. Log in again through the browser.",
        command="gh auth login --web --hostname {hostname}",
    ),
    "no_credential": ErrorInfo(
        title="Not logged in",
        message="No GitHub credential was found in the credential store.",
        suggestion="Log in with one of the supported providers",
        command="gh auth login --web --hostname {hostname}",
    ),
    "no_provider": ErrorInfo(
        title="No login provider",
        message="Couldn't find a GitHub re-authentication provider on this machine.",
        suggestion="Install the GitHub CLI or Git Credential Manager.",
        command=None,
    ),
    "network_timeout": ErrorInfo(
        title="Connection timed out",
        message="Couldn't reach GitHub in time.",
        suggestion="Check your internet connection and try again.",
        command=None,
    ),
    "network_error": ErrorInfo(
        title="Network error",
        message="An error occurred while connecting to GitHub.",
        suggestion="Check your internet connection or try again later.",
        command=None,
    ),
    "rate_limit": ErrorInfo(
        title="Rate limited",
        message="Too many requests were sent to GitHub.",
        suggestion="Wait {retry_after} seconds and try again.",
        command=None,
    ),
    "server_error": ErrorInfo(
        title="GitHub server error",
        message="GitHub reported a server error.",
        suggestion="This is probably temporary. Try again later.",
        command=None,
    ),
    "not_found": ErrorInfo(
        title="Not found",
        message="The requested data could not be found.",
        suggestion="Check the owner and repository name.",
        command=None,
    ),
    "unknown": ErrorInfo(
        title="Unexpected error",
        message="An unexpected error occurred.",
        suggestion="Run again with --verbose for details.",
        command=None,
    ),
}


def get_error_type(error: Exception) -> str:
    """Determine error type from exception."""
    if isinstance(error, AuthorizationFailure):
        return "auth_failure"
    elif isinstance(error, NoCredentialError):
        return "no_credential"
    elif isinstance(error, NoReauthTargetAvailableError):
        return "no_provider"
    elif isinstance(error, RateLimitError):
        return "rate_limit"
    elif isinstance(error, httpx.TimeoutException):
        return "network_timeout"
    elif isinstance(error, httpx.TransportError):
        return "network_error"
    elif isinstance(error, GitHubAPIError):
        status = error.status_code
        if status == 404:
            return "not_found"
        elif status and status >= 500:
            return "server_error"

    return "unknown"


def format_error(
    error: Exception,
    console: Console,
    hostname: str | None = None,
    verbose: bool = False,
) -> None:
    """Format and display a user-friendly error message."""
    error_type = get_error_type(error)
    info = ERROR_MESSAGES.get(error_type, ERROR_MESSAGES["unknown"])

    suggestion = info.suggestion
    command = info.command

    if command and "{hostname}" in command:
        command = command.format(hostname=hostname or "github.com")

    if "{retry_after}" in suggestion:
        retry_after = getattr(error, "retry_after", 60)
        suggestion = suggestion.format(retry_after=retry_after)

    content_lines = [
        f"[white]{info.message}[/white]",
        "",
        f"[yellow]Suggestion:[/yellow] {suggestion}",
    ]

    if command:
        content_lines.append("")
        content_lines.append(f"[cyan]{command}[/cyan]")

    # Show technical details in verbose mode
    if verbose:
        content_lines.append("")
        content_lines.append("[dim]" + "─" * 40 + "[/dim]")
        content_lines.append(f"[dim]Type: {type(error).__name__}[/dim]")
        content_lines.append(f"[dim]Details: {escape(str(error))}[/dim]")

    console.print()
    console.print(Panel(
        "\n".join(content_lines),
        title=f"[red bold]Error: {info.title}[/red bold]",
        border_style="red",
        padding=(1, 2),
    ))
    console.print()


def format_result(message: str, console: Console, title: str = "GitHub") -> None:
    """Show an operation result."""
    console.print(Panel(
        f"[white]{escape(message)}[/white]",
        title=f"[green bold]{title}[/green bold]",
        border_style="green",
        padding=(0, 2),
    ))
