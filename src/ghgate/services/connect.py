"""Wire the credential gate to the keyring store and installed providers."""

from ghgate.auth import CredentialGate, ReauthTrigger, TokenStore
from ghgate.config import Settings, get_settings
from ghgate.host import CommandDispatcher, build_default_registry


def get_credential_gate(
    settings: Settings | None = None,
    dispatcher: CommandDispatcher | None = None,
) -> CredentialGate:
    """Build a gate for the configured target.

    Args:
        settings: Settings to use (global settings if None)
        dispatcher: Host dispatcher (providers installed on this machine if None)
    """
    settings = settings or get_settings()
    if dispatcher is None:
        dispatcher = build_default_registry(settings)

    store = TokenStore(settings.target, settings.credential_namespace)
    return CredentialGate(store, ReauthTrigger(dispatcher))
