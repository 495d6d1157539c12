"""Domain value objects for Show Talk.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum

from pydantic import field_validator

from showtalk.domain.value.common import RootValueObject


class VoteValue(str, Enum):
    """Direction of a vote on a comment."""

    UPVOTE = "UPVOTE"
    DOWNVOTE = "DOWNVOTE"


class SortMode(str, Enum):
    """Ordering applied to the top-level comments of a discussion."""

    NEW = "new"  # created_at DESC
    TOP = "top"  # score DESC, then created_at DESC
    BEST = "best"  # score blended with engagement, see comment_tree.best_key


class DiscussionEntityType(str, Enum):
    """Kind of catalogue entry a discussion is attached to."""

    SHOW = "show"
    SEASON = "season"
    EPISODE = "episode"


class Handle(RootValueObject[str]):
    """User handle issued by the identity provider.

    Denormalized onto comments so threads render without a user lookup.
    """

    @field_validator("root")
    @classmethod
    def validate_handle_format(cls, v: str) -> str:
        """Validate handle is not empty and within length limits."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Handle must be 1-255 characters")
        return v
