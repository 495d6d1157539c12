"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import List, Sequence

from showtalk.domain.model.vote import Vote
from showtalk.domain.value import CommentId, UserId


class VoteRepository(ABC):
    """Repository for Vote entity.

    Defines the contract for vote persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def upsert(self, vote: Vote) -> Vote:
        """Create the vote or replace the value of the user's existing vote.

        Args:
            vote: The vote to store

        Returns:
            The stored vote (keeps the original ID when replacing)
        """
        pass

    @abstractmethod
    async def delete_by_user_and_comment(
        self, user_id: UserId, comment_id: CommentId
    ) -> bool:
        """Delete a user's vote on a comment.

        Args:
            user_id: The user's ID
            comment_id: The comment's ID

        Returns:
            True if a vote was deleted, False if no vote existed
        """
        pass

    @abstractmethod
    async def find_by_comments(self, comment_ids: Sequence[CommentId]) -> List[Vote]:
        """Find all votes on several comments (batch query).

        Args:
            comment_ids: Comment IDs

        Returns:
            Votes on any of the comments
        """
        pass
