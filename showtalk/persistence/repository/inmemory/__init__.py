"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .discussion import InMemoryDiscussionRepository
from .reaction import InMemoryReactionRepository
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryDiscussionRepository",
    "InMemoryReactionRepository",
    "InMemoryVoteRepository",
]
