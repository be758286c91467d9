"""Trigger an external re-authentication flow.

The flow itself lives outside this package: it is registered with the host
as a named command, and raising that command returns nothing. Whether the
user actually finished logging in can only be seen by reading the credential
store again afterwards.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from ghgate.exceptions import CommandNotFoundError, NoReauthTargetAvailableError
from ghgate.host.dispatch import CommandDispatcher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReauthEndpoint:
    """A host command that may provide the re-authentication flow."""

    namespace: str
    command_id: int

    def __str__(self) -> str:
        return f"{self.namespace}:{self.command_id:#06x}"


# Connect command from GitHub Essentials
ESSENTIALS_CONNECT = ReauthEndpoint("8de10943-8643-4f81-88a3-83b81d204ff4", 0x0110)

# Connect command from GitHub for Visual Studio
GITHUB_CONNECT = ReauthEndpoint("c4c91892-8881-4588-a5d9-b41e8f540f5a", 0x0110)

DEFAULT_ENDPOINTS = (ESSENTIALS_CONNECT, GITHUB_CONNECT)


class ReauthTrigger:
    """Raises the first re-authentication command the host knows about."""

    def __init__(
        self,
        dispatcher: CommandDispatcher,
        endpoints: Iterable[ReauthEndpoint] = DEFAULT_ENDPOINTS,
    ):
        self._dispatcher = dispatcher
        self.endpoints = tuple(endpoints)
        if not self.endpoints:
            raise ValueError("At least one re-authentication endpoint is required")

    def run(self) -> None:
        """Dispatch the first available endpoint.

        Raises:
            NoReauthTargetAvailableError: If no endpoint exists in the host
        """
        for endpoint in self.endpoints:
            if self._try_dispatch(endpoint):
                logger.info(f"Re-authentication requested via {endpoint}")
                return

        raise NoReauthTargetAvailableError()

    def _try_dispatch(self, endpoint: ReauthEndpoint) -> bool:
        try:
            self._dispatcher.dispatch(endpoint.namespace, endpoint.command_id)
        except CommandNotFoundError:
            logger.debug(f"Re-authentication command {endpoint} not available")
            return False
        return True
