"""Base model for stored domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for discussions, comments, votes and reactions.

    Entities are frozen: services derive changed copies with model_copy() and
    hand them to a repository, which decides how the change is persisted.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")
