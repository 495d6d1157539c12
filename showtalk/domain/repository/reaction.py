"""Reaction repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from showtalk.domain.model.reaction import Reaction, ReactionType
from showtalk.domain.value import CommentId, ReactionTypeId, UserId


class ReactionRepository(ABC):
    """Repository for Reaction and ReactionType entities."""

    @abstractmethod
    async def find_types(self) -> List[ReactionType]:
        """List all reaction types ordered by category, then name."""
        pass

    @abstractmethod
    async def find_type_by_id(
        self, reaction_type_id: ReactionTypeId
    ) -> Optional[ReactionType]:
        """Find a reaction type by ID."""
        pass

    @abstractmethod
    async def find_by_user_and_comment(
        self, user_id: UserId, comment_id: CommentId
    ) -> Optional[Reaction]:
        """Find a user's reaction on a comment."""
        pass

    @abstractmethod
    async def upsert(self, reaction: Reaction) -> Reaction:
        """Create the reaction or replace the type of the user's existing one.

        Args:
            reaction: The reaction to store

        Returns:
            The stored reaction
        """
        pass

    @abstractmethod
    async def delete_by_user_and_comment(
        self, user_id: UserId, comment_id: CommentId
    ) -> bool:
        """Delete a user's reaction on a comment.

        Returns:
            True if a reaction was deleted, False if none existed
        """
        pass

    @abstractmethod
    async def find_by_comments(
        self, comment_ids: Sequence[CommentId]
    ) -> List[Reaction]:
        """Find all reactions on several comments (batch query)."""
        pass
