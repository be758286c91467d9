"""API module for ghgate."""

from ghgate.api.client import GitHubClient
from ghgate.api.models import GitHubModel, GraphQLError, Repository, Viewer

__all__ = [
    # Client
    "GitHubClient",
    # Models
    "GitHubModel",
    "GraphQLError",
    "Repository",
    "Viewer",
]
