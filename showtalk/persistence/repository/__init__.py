"""PostgreSQL repository implementations."""

from showtalk.persistence.repository.comment import PostgresCommentRepository
from showtalk.persistence.repository.discussion import PostgresDiscussionRepository
from showtalk.persistence.repository.reaction import PostgresReactionRepository
from showtalk.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresDiscussionRepository",
    "PostgresCommentRepository",
    "PostgresVoteRepository",
    "PostgresReactionRepository",
]
