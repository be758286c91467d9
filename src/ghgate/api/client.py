"""HTTP client for the GitHub GraphQL API with retry logic."""

import logging
import re
from typing import Any

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ghgate.api.models import GraphQLError, Repository, Viewer
from ghgate.config import get_settings
from ghgate.exceptions import AuthorizationFailure, GitHubAPIError, RateLimitError

logger = logging.getLogger(__name__)

# GraphQL error types that a different token could fix
AUTHORIZATION_ERROR_TYPES = {"FORBIDDEN", "INSUFFICIENT_SCOPES"}

VIEWER_QUERY = "query { viewer { login name } }"

VIEWER_EMAIL_QUERY = "query { viewer { login name email } }"

REPOSITORY_QUERY = """
query($owner: String!, $name: String!) {
  repositoryOwner(login: $owner) {
    repository(name: $name) { nameWithOwner description }
  }
}
"""


SSO_PATTERN = re.compile(r"\bsaml\b|single sign-on|\bsso\b", re.IGNORECASE)


def _mentions_sso(message: str) -> bool:
    return SSO_PATTERN.search(message) is not None


def _retry_after(response: httpx.Response, default: int = 60) -> int:
    """Seconds from the Retry-After header, or the default if missing or not a number."""
    try:
        return int(response.headers.get("Retry-After", default))
    except ValueError:
        return default


class GitHubClient:
    """Synchronous client for the GitHub GraphQL API."""

    def __init__(
        self,
        token: str,
        timeout: int | None = None,
        api_url: str | None = None,
    ):
        settings = get_settings()
        self.token = token
        self.api_url = api_url or settings.api_url
        self._timeout = timeout or settings.timeout
        self._user_agent = settings.user_agent
        self._client: httpx.Client | None = None

    def __enter__(self) -> "GitHubClient":
        """Enter context manager, creating HTTP client."""
        self._client = httpx.Client(
            headers={
                "Authorization": f"Bearer {self.token}",
                "Accept": "application/json",
                "User-Agent": self._user_agent,
            },
            timeout=self._timeout,
        )
        return self

    def __exit__(self, *args) -> None:
        """Exit context manager, closing HTTP client."""
        if self._client:
            self._client.close()
            self._client = None

    def _check_client(self) -> None:
        """Ensure client is initialized."""
        if self._client is None:
            raise RuntimeError("Client not initialized - use 'with' context manager")

    def _handle_response(self, response: httpx.Response) -> dict[str, Any]:
        """Handle API response, raising appropriate errors."""
        if response.status_code == 401:
            raise AuthorizationFailure("GitHub rejected the token", 401)

        if response.status_code == 403:
            if response.headers.get("X-RateLimit-Remaining") == "0":
                retry_after = _retry_after(response)
                raise RateLimitError("Rate limit exceeded", retry_after, 403)
            if "X-GitHub-SSO" in response.headers or _mentions_sso(response.text):
                raise AuthorizationFailure(
                    "Token not authorized for this organization's SAML single sign-on",
                    403,
                )

        if response.status_code == 429:
            retry_after = _retry_after(response)
            raise RateLimitError("Rate limit exceeded", retry_after)

        if response.status_code >= 400:
            # Log detailed error for debugging, but don't expose raw response to users
            logger.error(f"API error: {response.status_code} - {response.text}")
            raise GitHubAPIError(
                f"API request failed ({response.status_code})",
                response.status_code,
            )

        payload = response.json()
        self._raise_for_errors(payload.get("errors") or [])
        return payload.get("data") or {}

    def _raise_for_errors(self, raw_errors: list[dict[str, Any]]) -> None:
        """Raise for GraphQL errors, ignoring NOT_FOUND (returned as null data)."""
        errors = [GraphQLError.model_validate(e) for e in raw_errors]
        errors = [e for e in errors if e.type != "NOT_FOUND"]
        if not errors:
            return

        message = "; ".join(e.message for e in errors)
        for error in errors:
            if error.type in AUTHORIZATION_ERROR_TYPES or _mentions_sso(error.message):
                raise AuthorizationFailure(message)

        logger.error(f"GraphQL error: {message}")
        raise GitHubAPIError(message)

    @retry(
        retry=retry_if_exception_type((httpx.TimeoutException, httpx.ConnectError)),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        reraise=True,
    )
    def query(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """Run a GraphQL query and return its ``data``."""
        self._check_client()
        assert self._client is not None

        body: dict[str, Any] = {"query": query}
        if variables:
            body["variables"] = variables
        response = self._client.post(self.api_url, json=body)
        return self._handle_response(response)

    def get_viewer(self) -> Viewer:
        """Get the authenticated user."""
        data = self.query(VIEWER_QUERY)
        return Viewer.model_validate(data["viewer"])

    def get_viewer_email(self) -> Viewer:
        """Get the authenticated user including public email.

        Needs the 'user:email' or 'read:user' scope.
        """
        data = self.query(VIEWER_EMAIL_QUERY)
        return Viewer.model_validate(data["viewer"])

    def get_repository(self, owner: str, name: str) -> Repository | None:
        """Get a repository, or None if the viewer can't see it."""
        data = self.query(REPOSITORY_QUERY, {"owner": owner, "name": name})
        repository_owner = data.get("repositoryOwner")
        if not repository_owner or not repository_owner.get("repository"):
            return None
        return Repository.model_validate(repository_owner["repository"])
