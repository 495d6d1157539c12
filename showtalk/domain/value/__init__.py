"""Domain value objects for Show Talk."""

from showtalk.domain.value.identifiers import (
    CommentId,
    DiscussionId,
    ReactionId,
    ReactionTypeId,
    UserId,
    VoteId,
)
from showtalk.domain.value.types import (
    DiscussionEntityType,
    Handle,
    SortMode,
    VoteValue,
)

__all__ = [
    # Identifiers
    "UserId",
    "DiscussionId",
    "CommentId",
    "VoteId",
    "ReactionId",
    "ReactionTypeId",
    # Types
    "DiscussionEntityType",
    "Handle",
    "SortMode",
    "VoteValue",
]
