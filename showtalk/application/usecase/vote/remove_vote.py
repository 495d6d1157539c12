"""Remove vote use case."""

from uuid import UUID

from pydantic import BaseModel

from showtalk.application.usecase.base import BaseUseCase
from showtalk.domain.service import VoteService
from showtalk.domain.value import CommentId, UserId


class RemoveVoteRequest(BaseModel):
    """Remove vote request."""

    comment_id: str  # UUID string
    user_id: str  # User ID from authenticated user


class RemoveVoteResponse(BaseModel):
    """Remove vote response."""

    success: bool
    message: str


class RemoveVoteUseCase(BaseUseCase[RemoveVoteRequest, RemoveVoteResponse]):
    """Use case for clearing the user's vote on a comment."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize remove vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: RemoveVoteRequest) -> RemoveVoteResponse:
        """Execute remove vote flow.

        Args:
            request: Remove vote request

        Returns:
            Remove vote response
        """
        removed = await self.vote_service.remove_vote(
            comment_id=CommentId(UUID(request.comment_id)),
            user_id=UserId(UUID(request.user_id)),
        )

        if removed:
            return RemoveVoteResponse(
                success=True,
                message="Vote removed successfully",
            )
        return RemoveVoteResponse(
            success=False,
            message="No vote found to remove",
        )
