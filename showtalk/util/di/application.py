"""Application layer DI providers."""

from dishka import Scope, provide

from showtalk.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetCommentsUseCase,
    GetSubthreadUseCase,
)
from showtalk.application.usecase.reaction import (
    ListReactionTypesUseCase,
    ReactCommentUseCase,
    RemoveReactionUseCase,
)
from showtalk.application.usecase.vote import RemoveVoteUseCase, VoteCommentUseCase
from showtalk.config import CommentSettings
from showtalk.domain.service import (
    CommentService,
    DiscussionService,
    JWTService,
    ReactionService,
    VoteService,
)
from showtalk.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_get_comments_use_case(
        self,
        comment_service: CommentService,
        discussion_service: DiscussionService,
        vote_service: VoteService,
        reaction_service: ReactionService,
        jwt_service: JWTService,
        comment_settings: CommentSettings,
    ) -> GetCommentsUseCase:
        """Provide get comments use case."""
        return GetCommentsUseCase(
            comment_service=comment_service,
            discussion_service=discussion_service,
            vote_service=vote_service,
            reaction_service=reaction_service,
            jwt_service=jwt_service,
            comment_settings=comment_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_subthread_use_case(
        self,
        comment_service: CommentService,
        vote_service: VoteService,
        reaction_service: ReactionService,
        jwt_service: JWTService,
        comment_settings: CommentSettings,
    ) -> GetSubthreadUseCase:
        """Provide get sub-thread use case."""
        return GetSubthreadUseCase(
            comment_service=comment_service,
            vote_service=vote_service,
            reaction_service=reaction_service,
            jwt_service=jwt_service,
            comment_settings=comment_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self,
        comment_service: CommentService,
        discussion_service: DiscussionService,
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            comment_service=comment_service,
            discussion_service=discussion_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(comment_service=comment_service)

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_vote_comment_use_case(self, vote_service: VoteService) -> VoteCommentUseCase:
        """Provide vote comment use case."""
        return VoteCommentUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_remove_vote_use_case(self, vote_service: VoteService) -> RemoveVoteUseCase:
        """Provide remove vote use case."""
        return RemoveVoteUseCase(vote_service=vote_service)

    # Reaction use cases
    @provide(scope=Scope.REQUEST)
    def get_list_reaction_types_use_case(
        self, reaction_service: ReactionService
    ) -> ListReactionTypesUseCase:
        """Provide list reaction types use case."""
        return ListReactionTypesUseCase(reaction_service=reaction_service)

    @provide(scope=Scope.REQUEST)
    def get_react_comment_use_case(
        self, reaction_service: ReactionService
    ) -> ReactCommentUseCase:
        """Provide react comment use case."""
        return ReactCommentUseCase(reaction_service=reaction_service)

    @provide(scope=Scope.REQUEST)
    def get_remove_reaction_use_case(
        self, reaction_service: ReactionService
    ) -> RemoveReactionUseCase:
        """Provide remove reaction use case."""
        return RemoveReactionUseCase(reaction_service=reaction_service)
