"""Domain layer DI providers."""

from dishka import Scope, provide

from showtalk.config import AuthSettings, CommentSettings
from showtalk.domain.repository import (
    CommentRepository,
    DiscussionRepository,
    ReactionRepository,
    VoteRepository,
)
from showtalk.domain.service import (
    CommentService,
    DiscussionService,
    JWTService,
    ReactionService,
    VoteService,
)
from showtalk.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_discussion_service(
        self, discussion_repository: DiscussionRepository
    ) -> DiscussionService:
        """Provide discussion domain service."""
        return DiscussionService(discussion_repository=discussion_repository)

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        comment_settings: CommentSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            comment_settings=comment_settings,
        )

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        comment_service: CommentService,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository,
            comment_service=comment_service,
        )

    @provide
    def get_reaction_service(
        self,
        reaction_repository: ReactionRepository,
        comment_service: CommentService,
    ) -> ReactionService:
        """Provide reaction domain service."""
        return ReactionService(
            reaction_repository=reaction_repository,
            comment_service=comment_service,
        )
