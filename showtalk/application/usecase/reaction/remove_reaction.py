"""Remove reaction use case."""

from uuid import UUID

from pydantic import BaseModel

from showtalk.application.usecase.base import BaseUseCase
from showtalk.domain.service import ReactionService
from showtalk.domain.value import CommentId, UserId


class RemoveReactionRequest(BaseModel):
    """Remove reaction request."""

    comment_id: str  # UUID string
    user_id: str  # User ID from authenticated user


class RemoveReactionResponse(BaseModel):
    """Remove reaction response.

    Removing a reaction that doesn't exist still succeeds.
    """

    success: bool


class RemoveReactionUseCase(BaseUseCase[RemoveReactionRequest, RemoveReactionResponse]):
    """Use case for removing the user's reaction from a comment."""

    def __init__(self, reaction_service: ReactionService) -> None:
        """Initialize remove reaction use case.

        Args:
            reaction_service: Reaction domain service
        """
        self.reaction_service = reaction_service

    async def execute(self, request: RemoveReactionRequest) -> RemoveReactionResponse:
        await self.reaction_service.remove_reaction(
            comment_id=CommentId(UUID(request.comment_id)),
            user_id=UserId(UUID(request.user_id)),
        )
        return RemoveReactionResponse(success=True)
