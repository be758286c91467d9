"""Exceptions for ghgate."""


class GhGateError(Exception):
    """Base exception for ghgate errors."""


class NoCredentialError(GhGateError):
    """No token could be obtained, even after re-authentication."""

    def __init__(self, target: str | None = None):
        msg = "Couldn't establish a GitHub connection"
        if target:
            msg += f" (no credential stored for {target})"
        super().__init__(msg)
        self.target = target


class NoReauthTargetAvailableError(GhGateError):
    """No re-authentication provider is installed in this host."""

    def __init__(self, message: str = "Couldn't find a GitHub re-authentication provider"):
        super().__init__(message)


class CommandNotFoundError(GhGateError):
    """The host has no command registered under the given identifier."""

    def __init__(self, namespace: str, command_id: int):
        super().__init__(f"Command not found: {namespace}:{command_id:#06x}")
        self.namespace = namespace
        self.command_id = command_id


class GitHubAPIError(GhGateError):
    """Base exception for GitHub API errors."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class AuthorizationFailure(GitHubAPIError):
    """Token was rejected for scope or SSO policy reasons."""


class RateLimitError(GitHubAPIError):
    """Rate limit exceeded."""

    def __init__(self, message: str, retry_after: int = 60, status_code: int = 429):
        super().__init__(message, status_code)
        self.retry_after = retry_after
