"""Base classes for value objects."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, RootModel

T = TypeVar("T")


class ValueObject(BaseModel):
    """Immutable record compared by value.

    Used for derived read-side data such as vote tallies, reaction summaries
    and thread statistics, which are recomputed rather than stored.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")


class RootValueObject(RootModel[T], Generic[T]):
    """Value object wrapping a single primitive (accessed via .root).

    model_dump() returns the primitive itself, so wrapped values map straight
    onto table columns.
    """

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.root)
