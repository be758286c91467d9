"""CLI utility functions and decorators."""

import logging
from functools import wraps
from typing import Callable, TypeVar

import httpx
import typer
from rich.console import Console

from ghgate.cli.errors import format_error
from ghgate.config import get_settings
from ghgate.exceptions import GhGateError

console = Console()

F = TypeVar("F", bound=Callable)


def configure_logging(verbose: bool) -> None:
    """Send ghgate logs to the console via rich."""
    from rich.logging import RichHandler

    logger = logging.getLogger("ghgate")
    logger.handlers.clear()
    if verbose:
        logger.addHandler(RichHandler(console=console, show_path=False))
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.WARNING)


def handle_api_errors(f: F) -> F:
    """Decorator to handle common errors in CLI commands.

    Credential, re-authentication, API and network errors are shown as
    a formatted panel and the command exits with status 1.

    Usage:
        @app.command()
        @handle_api_errors
        def my_command():
            ...
    """

    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except (GhGateError, httpx.TransportError) as e:
            format_error(
                e,
                console,
                hostname=get_settings().hostname,
                verbose=logging.getLogger("ghgate").isEnabledFor(logging.DEBUG),
            )
            raise typer.Exit(1)

    return wrapper  # type: ignore
