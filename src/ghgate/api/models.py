"""GraphQL response models."""

from pydantic import BaseModel, ConfigDict, Field


class GitHubModel(BaseModel):
    """Base model with common configuration.

    - populate_by_name: Allow both alias and field name in input
    - extra="ignore": Ignore fields we did not ask for
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
    )


class Viewer(GitHubModel):
    """The authenticated user."""

    login: str
    name: str | None = None
    email: str | None = None

    @property
    def display_name(self) -> str:
        """Name if set, otherwise the login."""
        return self.name or self.login


class Repository(GitHubModel):
    """Repository summary."""

    name_with_owner: str = Field(alias="nameWithOwner")
    description: str | None = None


class GraphQLError(GitHubModel):
    """A single entry of the GraphQL ``errors`` array."""

    message: str
    type: str | None = None
    path: list[str | int] | None = None
