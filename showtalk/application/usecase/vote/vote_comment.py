"""Vote on comment use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from showtalk.application.usecase.base import BaseUseCase
from showtalk.domain.service import VoteService
from showtalk.domain.value import CommentId, UserId, VoteValue


class VoteCommentRequest(BaseModel):
    """Vote on comment request."""

    comment_id: str  # UUID string
    value: VoteValue
    user_id: str  # User ID from authenticated user


class VoteItem(BaseModel):
    """Stored vote in responses."""

    id: str
    comment_id: str
    user_id: str
    value: VoteValue
    created_at: datetime
    updated_at: datetime


class VoteCommentResponse(BaseModel):
    """Vote on comment response with the comment's fresh tally."""

    vote: VoteItem
    score: int
    upvotes: int
    downvotes: int


class VoteCommentUseCase(BaseUseCase[VoteCommentRequest, VoteCommentResponse]):
    """Use case for casting or changing a vote on a comment."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize vote comment use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: VoteCommentRequest) -> VoteCommentResponse:
        """Execute vote flow.

        Args:
            request: Vote request

        Returns:
            The stored vote and the comment's score

        Raises:
            NotFoundError: If the comment doesn't exist
            ContentDeletedException: If the comment has been deleted
        """
        vote, tally = await self.vote_service.vote(
            comment_id=CommentId(UUID(request.comment_id)),
            user_id=UserId(UUID(request.user_id)),
            value=request.value,
        )

        return VoteCommentResponse(
            vote=VoteItem(
                id=str(vote.id),
                comment_id=str(vote.comment_id),
                user_id=str(vote.user_id),
                value=vote.value,
                created_at=vote.created_at,
                updated_at=vote.updated_at,
            ),
            score=tally.score,
            upvotes=tally.upvotes,
            downvotes=tally.downvotes,
        )
