"""GitHub token lookup in the OS credential store.

Tokens are read the way Git Credential Manager writes them: one keyring
entry per target URL under the service name ``git:https://github.com``,
with the token in the password field.
"""

import logging

import keyring
import keyring.errors

from ghgate.config import get_settings, validate_target

logger = logging.getLogger(__name__)

DEFAULT_USERNAME = "PersonalAccessToken"


class TokenStore:
    """Reads the bearer token for a fixed target from keyring.

    Every lookup goes to the credential store; nothing is cached, so a
    token written by an external login flow is seen on the next read.
    """

    def __init__(self, target: str | None = None, namespace: str | None = None):
        settings = get_settings()
        self.target = validate_target(target or settings.target)
        self.namespace = namespace or settings.credential_namespace

    @property
    def service_name(self) -> str:
        """Keyring service name for the target."""
        return f"{self.namespace}:{self.target}"

    def lookup_token(self) -> str | None:
        """Read the current token, or None if none is stored."""
        try:
            credential = keyring.get_credential(self.service_name, None)
        except keyring.errors.KeyringError as e:
            logger.warning(f"Credential store unavailable for {self.service_name}: {e}")
            return None

        if credential is None or not credential.password:
            logger.debug(f"No credential stored for {self.service_name}")
            return None
        return credential.password

    def save_token(self, token: str, username: str = DEFAULT_USERNAME) -> None:
        """Store a token for the target."""
        if not token:
            raise ValueError("Token cannot be empty")
        keyring.set_password(self.service_name, username, token)
        logger.debug(f"Credential stored for {self.service_name}")

    def delete_token(self, username: str | None = None) -> bool:
        """Delete the stored token.

        Args:
            username: Account name of the entry (looked up if not given)

        Returns:
            True if a token was deleted, False if none was stored
        """
        if username is None:
            try:
                credential = keyring.get_credential(self.service_name, None)
            except keyring.errors.KeyringError as e:
                logger.warning(f"Credential store unavailable for {self.service_name}: {e}")
                return False
            if credential is None:
                return False
            username = credential.username
        try:
            keyring.delete_password(self.service_name, username)
            return True
        except keyring.errors.PasswordDeleteError:
            return False


def get_token_store(target: str | None = None) -> TokenStore:
    """Get a token store instance."""
    return TokenStore(target)
