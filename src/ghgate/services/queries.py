"""GitHub operations that can run behind the credential gate.

Each function takes the bearer token as its first argument and returns a
message for display.
"""

from ghgate.api import GitHubClient


def viewer_name_message(token: str) -> str:
    """Greet the authenticated user. Works with any valid token."""
    with GitHubClient(token) as client:
        viewer = client.get_viewer()
    return f"Hello, {viewer.display_name}!"


def viewer_email_message(token: str) -> str:
    """Greet the user and show their public email.

    Reading the email requires the 'user:email' or 'read:user' scope, which
    tokens created by git credential helpers usually lack.
    """
    with GitHubClient(token) as client:
        viewer = client.get_viewer_email()

    email = viewer.email or "not set"
    return f"Hello, {viewer.display_name}!\n\nYour public email address is {email}."


def repository_description_message(token: str, owner: str, name: str) -> str:
    """Describe a repository.

    Repositories of organizations with SAML enforcement are only visible to
    tokens authorized for that organization.
    """
    with GitHubClient(token) as client:
        repository = client.get_repository(owner, name)

    if repository is None:
        return f"Viewer doesn't have access to the repository {owner}/{name}"

    return f"{repository.name_with_owner}: {repository.description or ''}".rstrip()
