"""Repository interfaces for the Show Talk domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from showtalk.domain.repository.comment import CommentRepository
from showtalk.domain.repository.discussion import DiscussionRepository
from showtalk.domain.repository.reaction import ReactionRepository
from showtalk.domain.repository.vote import VoteRepository

__all__ = [
    "DiscussionRepository",
    "CommentRepository",
    "VoteRepository",
    "ReactionRepository",
]
