"""Mock persistence providers for testing."""

from uuid import uuid4

from dishka import Scope, provide

from showtalk.domain.model import ReactionType
from showtalk.domain.repository import (
    CommentRepository,
    DiscussionRepository,
    ReactionRepository,
    VoteRepository,
)
from showtalk.domain.value import ReactionTypeId
from showtalk.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryDiscussionRepository,
    InMemoryReactionRepository,
    InMemoryVoteRepository,
)
from showtalk.util.di.infrastructure.persistence import PersistenceProvider

# Subset of the seeded catalogue, plus one uncategorized type
SEED_REACTION_TYPES = [
    ReactionType(id=ReactionTypeId(uuid4()), name="slay", emoji="💅", category="positive"),
    ReactionType(id=ReactionTypeId(uuid4()), name="iconic", emoji="🌟", category="positive"),
    ReactionType(id=ReactionTypeId(uuid4()), name="tea", emoji="☕", category="emotional"),
    ReactionType(id=ReactionTypeId(uuid4()), name="drama", emoji="🎭", category="reality-tv"),
    ReactionType(id=ReactionTypeId(uuid4()), name="meh"),
]


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Repositories are APP-scoped so state survives across the requests of one
    container. Every test builds its own container, which keeps tests isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_discussion_repository(self) -> DiscussionRepository:
        """Provide in-memory discussion repository."""
        return InMemoryDiscussionRepository()

    @provide(scope=Scope.APP)
    def get_comment_repository(self) -> CommentRepository:
        """Provide in-memory comment repository."""
        return InMemoryCommentRepository()

    @provide(scope=Scope.APP)
    def get_vote_repository(self) -> VoteRepository:
        """Provide in-memory vote repository."""
        return InMemoryVoteRepository()

    @provide(scope=Scope.APP)
    def get_reaction_repository(self) -> ReactionRepository:
        """Provide in-memory reaction repository seeded with reaction types."""
        return InMemoryReactionRepository(SEED_REACTION_TYPES)
