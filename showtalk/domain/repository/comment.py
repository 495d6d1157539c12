"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from showtalk.domain.model.comment import Comment
from showtalk.domain.value import CommentId, DiscussionId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_discussion(self, discussion_id: DiscussionId) -> List[Comment]:
        """Find all comments of a discussion in tree order.

        Soft-deleted comments are included: they still anchor their replies
        and render as a placeholder.

        Args:
            discussion_id: The discussion ID

        Returns:
            List of comments ordered by materialized path
        """
        pass

    @abstractmethod
    async def find_subtree(self, root: Comment) -> List[Comment]:
        """Find a comment and all of its descendants in tree order.

        Args:
            root: The comment at the top of the branch

        Returns:
            The root followed by every comment whose path extends root.path
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update).

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def soft_delete(self, comment_id: CommentId) -> Optional[Comment]:
        """Mark a comment as deleted.

        Args:
            comment_id: The comment ID

        Returns:
            The updated comment, or None if it doesn't exist
        """
        pass
