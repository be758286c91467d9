"""Run operations that need a GitHub token, recovering once from auth failures.

An operation is tried optimistically with whatever token the credential
store holds. If GitHub rejects the token because it lacks a scope or the
organization enforces SAML single sign-on, the user is sent through the
external re-authentication flow and the operation is retried a single time,
but only when the store now holds a different token.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Protocol, TypeVar

from ghgate.auth.reauth import ReauthTrigger
from ghgate.exceptions import AuthorizationFailure, NoCredentialError

logger = logging.getLogger(__name__)

R = TypeVar("R")


class TokenSource(Protocol):
    """Anything that can return the current bearer token."""

    def lookup_token(self) -> str | None: ...


class CredentialGate:
    """Ensures an operation runs with a working token."""

    def __init__(self, token_source: TokenSource, reauth_trigger: ReauthTrigger):
        self._tokens = token_source
        self._reauth = reauth_trigger

    def ensure(self, operation: Callable[[str], R]) -> R:
        """Run ``operation`` with the stored token.

        Args:
            operation: Callable taking the bearer token

        Returns:
            Whatever the operation returns

        Raises:
            NoCredentialError: If no token exists even after re-authentication
            NoReauthTargetAvailableError: If re-authentication was needed but
                no provider is installed
            AuthorizationFailure: If the token was rejected and
                re-authentication did not produce a new one, or the retry
                was rejected as well
        """
        token = self._require_token()

        try:
            return operation(token)
        except AuthorizationFailure:
            logger.warning("Token rejected by GitHub, requesting re-authentication")
            new_token = self._refreshed_token(token)
            if new_token is None:
                raise

        return operation(new_token)

    async def ensure_async(self, operation: Callable[[str], Awaitable[R]]) -> R:
        """Async version of :meth:`ensure` for coroutine operations."""
        token = self._require_token()

        try:
            return await operation(token)
        except AuthorizationFailure:
            logger.warning("Token rejected by GitHub, requesting re-authentication")
            new_token = self._refreshed_token(token)
            if new_token is None:
                raise

        return await operation(new_token)

    def _require_token(self) -> str:
        token = self._tokens.lookup_token()
        if token is not None:
            return token

        logger.info("No token stored, requesting authentication")
        self._reauth.run()
        token = self._tokens.lookup_token()
        if token is None:
            raise NoCredentialError(getattr(self._tokens, "target", None))
        return token

    def _refreshed_token(self, rejected: str) -> str | None:
        """Re-authenticate and return the new token, or None if unchanged."""
        self._reauth.run()
        new_token = self._tokens.lookup_token()
        if new_token is None or new_token == rejected:
            logger.debug("Re-authentication did not produce a new token")
            return None
        logger.debug("Retrying with re-authenticated token")
        return new_token
