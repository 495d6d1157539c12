"""React to comment use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from showtalk.application.usecase.base import BaseUseCase
from showtalk.domain.service import ReactionService
from showtalk.domain.value import CommentId, ReactionTypeId, UserId

from .list_reaction_types import ReactionTypeItem


class ReactCommentRequest(BaseModel):
    """React to comment request."""

    comment_id: str  # UUID string
    reaction_type_id: str  # UUID string
    user_id: str  # User ID from authenticated user


class ReactionItem(BaseModel):
    """Stored reaction in responses."""

    id: str
    comment_id: str
    user_id: str
    reaction_type: ReactionTypeItem
    created_at: datetime


class ReactCommentResponse(BaseModel):
    """React to comment response."""

    reaction: ReactionItem


class ReactCommentUseCase(BaseUseCase[ReactCommentRequest, ReactCommentResponse]):
    """Use case for adding or switching a reaction on a comment."""

    def __init__(self, reaction_service: ReactionService) -> None:
        """Initialize react comment use case.

        Args:
            reaction_service: Reaction domain service
        """
        self.reaction_service = reaction_service

    async def execute(self, request: ReactCommentRequest) -> ReactCommentResponse:
        """Execute react flow.

        Args:
            request: React request

        Returns:
            The stored reaction

        Raises:
            NotFoundError: If the comment or reaction type doesn't exist
            ContentDeletedException: If the comment has been deleted
        """
        reaction = await self.reaction_service.react(
            comment_id=CommentId(UUID(request.comment_id)),
            user_id=UserId(UUID(request.user_id)),
            reaction_type_id=ReactionTypeId(UUID(request.reaction_type_id)),
        )

        return ReactCommentResponse(
            reaction=ReactionItem(
                id=str(reaction.id),
                comment_id=str(reaction.comment_id),
                user_id=str(reaction.user_id),
                reaction_type=ReactionTypeItem.from_domain(reaction.reaction_type),
                created_at=reaction.created_at,
            )
        )
