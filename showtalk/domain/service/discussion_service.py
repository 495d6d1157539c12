"""Discussion domain service."""

import logfire

from showtalk.domain.error import NotFoundError
from showtalk.domain.model.discussion import Discussion
from showtalk.domain.repository import DiscussionRepository
from showtalk.domain.value import DiscussionId

from .base import Service


class DiscussionService(Service):
    """Domain service for discussion lookups."""

    def __init__(self, discussion_repository: DiscussionRepository) -> None:
        """Initialize discussion service.

        Args:
            discussion_repository: Discussion repository
        """
        self.discussion_repository = discussion_repository

    async def get_discussion_by_id(self, discussion_id: DiscussionId) -> Discussion:
        """Get a discussion by ID.

        Args:
            discussion_id: Discussion ID

        Returns:
            The discussion

        Raises:
            NotFoundError: If the discussion doesn't exist
        """
        with logfire.span(
            "discussion_service.get_discussion_by_id",
            discussion_id=str(discussion_id),
        ):
            discussion = await self.discussion_repository.find_by_id(discussion_id)
            if not discussion:
                logfire.warn("Discussion not found", discussion_id=str(discussion_id))
                raise NotFoundError("Discussion", str(discussion_id))
            return discussion
