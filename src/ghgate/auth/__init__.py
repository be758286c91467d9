"""Authentication module for ghgate."""

from ghgate.auth.gate import CredentialGate, TokenSource
from ghgate.auth.reauth import (
    DEFAULT_ENDPOINTS,
    ESSENTIALS_CONNECT,
    GITHUB_CONNECT,
    ReauthEndpoint,
    ReauthTrigger,
)
from ghgate.auth.token_store import TokenStore, get_token_store

__all__ = [
    # Gate
    "CredentialGate",
    "TokenSource",
    # Re-authentication
    "ReauthEndpoint",
    "ReauthTrigger",
    "DEFAULT_ENDPOINTS",
    "ESSENTIALS_CONNECT",
    "GITHUB_CONNECT",
    # Token storage
    "TokenStore",
    "get_token_store",
]
