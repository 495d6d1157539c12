"""Discussion repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from showtalk.domain.model.discussion import Discussion
from showtalk.domain.value import DiscussionId


class DiscussionRepository(ABC):
    """Repository for Discussion entity."""

    @abstractmethod
    async def find_by_id(self, discussion_id: DiscussionId) -> Optional[Discussion]:
        """Find a discussion by ID.

        Args:
            discussion_id: The discussion's unique identifier

        Returns:
            The discussion if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, discussion: Discussion) -> Discussion:
        """Save a discussion (create or update).

        Args:
            discussion: The discussion to save

        Returns:
            The saved discussion
        """
        pass
