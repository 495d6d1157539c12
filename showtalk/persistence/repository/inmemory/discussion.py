"""In-memory discussion repository for testing."""

from typing import Optional

from showtalk.domain.model.discussion import Discussion
from showtalk.domain.repository.discussion import DiscussionRepository
from showtalk.domain.value import DiscussionId


class InMemoryDiscussionRepository(DiscussionRepository):
    """In-memory implementation of DiscussionRepository for testing."""

    def __init__(self) -> None:
        self._discussions: dict[DiscussionId, Discussion] = {}

    async def find_by_id(self, discussion_id: DiscussionId) -> Optional[Discussion]:
        """Find a discussion by ID."""
        return self._discussions.get(discussion_id)

    async def save(self, discussion: Discussion) -> Discussion:
        """Save or update a discussion."""
        self._discussions[discussion.id] = discussion
        return discussion
