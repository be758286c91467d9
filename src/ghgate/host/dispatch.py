"""Host command dispatch.

A host exposes named, triggerable actions identified by a namespace and a
numeric command id. Re-authentication providers register themselves as such
actions; dispatching one that is not registered raises
``CommandNotFoundError`` so callers can fall back to another provider.
"""

import logging
import shutil
import subprocess
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Protocol

from ghgate.exceptions import CommandNotFoundError

if TYPE_CHECKING:
    from ghgate.auth.token_store import TokenStore
    from ghgate.config import Settings

logger = logging.getLogger(__name__)

CommandHandler = Callable[[], None]


class CommandDispatcher(Protocol):
    """Raises a host command by identifier."""

    def dispatch(self, namespace: str, command_id: int) -> None:
        """Invoke the command.

        Raises:
            CommandNotFoundError: If the host has no such command
        """
        ...


class CommandRegistry:
    """In-process table of host commands.

    Namespaces are compared case-insensitively since they are usually GUIDs.
    """

    def __init__(self) -> None:
        self._handlers: dict[tuple[str, int], CommandHandler] = {}

    @staticmethod
    def _key(namespace: str, command_id: int) -> tuple[str, int]:
        return namespace.lower(), command_id

    def register(self, namespace: str, command_id: int, handler: CommandHandler) -> None:
        """Register a handler, replacing any existing one."""
        self._handlers[self._key(namespace, command_id)] = handler

    def unregister(self, namespace: str, command_id: int) -> bool:
        """Remove a handler. Returns False if none was registered."""
        return self._handlers.pop(self._key(namespace, command_id), None) is not None

    def is_registered(self, namespace: str, command_id: int) -> bool:
        """Check if a command is registered."""
        return self._key(namespace, command_id) in self._handlers

    def dispatch(self, namespace: str, command_id: int) -> None:
        """Invoke a registered handler.

        Errors raised by the handler propagate unchanged.
        """
        handler = self._handlers.get(self._key(namespace, command_id))
        if handler is None:
            raise CommandNotFoundError(namespace, command_id)
        handler()

    def __len__(self) -> int:
        return len(self._handlers)


def run_login(argv: Sequence[str]) -> int:
    """Run an interactive login program until it exits.

    The user may need to answer prompts or finish a browser flow, so the
    caller only continues once the program is done.

    Returns:
        Exit status of the program

    Raises:
        CommandNotFoundError: If the executable is not on PATH
    """
    executable = shutil.which(argv[0])
    if executable is None:
        raise CommandNotFoundError(argv[0], 0)

    logger.debug(f"Running {' '.join(argv)}")
    result = subprocess.run([executable, *argv[1:]], check=False)
    if result.returncode != 0:
        logger.warning(f"{argv[0]} exited with status {result.returncode}")
    return result.returncode


def gh_login_command(hostname: str) -> list[str] | None:
    """GitHub CLI browser login, if the CLI is installed."""
    if shutil.which("gh") is None:
        return None
    return ["gh", "auth", "login", "--web", "--hostname", hostname]


def gcm_login_command() -> list[str] | None:
    """Git Credential Manager GitHub login, if GCM is installed."""
    if shutil.which("git-credential-manager") is not None:
        return ["git-credential-manager", "github", "login"]
    if shutil.which("git-credential-manager-core") is not None:
        return ["git-credential-manager-core", "github", "login"]
    return None


def gh_token(hostname: str) -> str | None:
    """Token the GitHub CLI holds for a host, or None."""
    executable = shutil.which("gh")
    if executable is None:
        return None
    result = subprocess.run(
        [executable, "auth", "token", "--hostname", hostname],
        capture_output=True,
        text=True,
        check=False,
    )
    token = result.stdout.strip()
    if result.returncode != 0 or not token:
        return None
    return token


def build_default_registry(settings: "Settings") -> CommandRegistry:
    """Register the re-authentication providers installed on this machine.

    Providers are mapped onto the well-known endpoints in the configured
    order; providers that are not installed are left unregistered.
    """
    from ghgate.auth.reauth import DEFAULT_ENDPOINTS
    from ghgate.auth.token_store import TokenStore

    store = TokenStore(settings.target, settings.credential_namespace)
    handlers: dict[str, CommandHandler] = {}

    gh_argv = gh_login_command(settings.hostname)
    if gh_argv is not None:
        handlers["gh"] = lambda: _gh_login(gh_argv, settings.hostname, store)

    gcm_argv = gcm_login_command()
    if gcm_argv is not None:
        # GCM writes the git:https://<host> entry itself
        handlers["gcm"] = lambda: run_login(gcm_argv)

    registry = CommandRegistry()
    for provider, endpoint in zip(settings.reauth_providers, DEFAULT_ENDPOINTS):
        handler = handlers.get(provider)
        if handler is None:
            logger.debug(f"Re-authentication provider '{provider}' not installed")
            continue
        registry.register(endpoint.namespace, endpoint.command_id, handler)
    return registry


def _gh_login(argv: list[str], hostname: str, store: "TokenStore") -> None:
    """Log in with the GitHub CLI and copy its token into the credential store."""
    if run_login(argv) != 0:
        return
    token = gh_token(hostname)
    if token is None:
        logger.warning(f"GitHub CLI has no token for {hostname} after login")
        return
    store.save_token(token)
