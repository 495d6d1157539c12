"""Vote entity.

Votes let the community curate comments with upvotes and downvotes.
Each user holds at most one vote per comment.
"""

from datetime import datetime

from pydantic import Field

from showtalk.domain.model.common import DomainModel
from showtalk.domain.value import CommentId, UserId, VoteId, VoteValue
from showtalk.domain.value.common import ValueObject


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per user per comment (enforced by database unique constraint)
    - Voting again replaces the previous value (upsert)
    """

    id: VoteId
    comment_id: CommentId
    user_id: UserId
    value: VoteValue
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class VoteTally(ValueObject):
    """Aggregated votes on one comment."""

    upvotes: int = 0
    downvotes: int = 0

    @property
    def score(self) -> int:
        """Upvotes minus downvotes."""
        return self.upvotes - self.downvotes

    @property
    def total(self) -> int:
        """Number of votes cast in either direction."""
        return self.upvotes + self.downvotes

    @classmethod
    def from_votes(cls, votes: list[Vote]) -> "VoteTally":
        """Count the votes of a single comment."""
        upvotes = sum(1 for v in votes if v.value == VoteValue.UPVOTE)
        return cls(upvotes=upvotes, downvotes=len(votes) - upvotes)
