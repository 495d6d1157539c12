"""Comment vote routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, HTTPException, status
from pydantic import BaseModel

from showtalk.application.usecase.vote import (
    RemoveVoteRequest,
    RemoveVoteResponse,
    RemoveVoteUseCase,
    VoteCommentRequest,
    VoteCommentResponse,
    VoteCommentUseCase,
)
from showtalk.domain.error import ContentDeletedException, NotFoundError
from showtalk.domain.service import JWTService
from showtalk.domain.value import VoteValue
from showtalk.interface.api.auth import require_user, resolve_token

router = APIRouter(prefix="/discussions", tags=["votes"], route_class=DishkaRoute)


class VoteAPIRequest(BaseModel):
    """API request for voting on a comment."""

    comment_id: str
    value: VoteValue


@router.post("/comments/vote", response_model=VoteCommentResponse)
async def vote_comment(
    request: VoteAPIRequest,
    vote_comment_use_case: FromDishka[VoteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> VoteCommentResponse:
    """Upvote or downvote a comment.

    Voting again replaces the previous vote. Requires authentication.

    Returns:
        The vote and the comment's new score

    Raises:
        HTTPException: 401 if not authenticated, 404 if the comment doesn't
            exist, 409 if it was deleted
    """
    payload = require_user(jwt_service, resolve_token(auth_token, authorization), "vote")

    try:
        return await vote_comment_use_case.execute(
            VoteCommentRequest(
                comment_id=request.comment_id,
                value=request.value,
                user_id=payload.user_id,
            )
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ContentDeletedException as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/comments/vote", response_model=RemoveVoteResponse)
async def remove_vote(
    comment_id: str,
    remove_vote_use_case: FromDishka[RemoveVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> RemoveVoteResponse:
    """Clear the caller's vote on a comment.

    Requires authentication.

    Raises:
        HTTPException: 401 if not authenticated, 400 on malformed IDs
    """
    payload = require_user(
        jwt_service, resolve_token(auth_token, authorization), "remove votes"
    )

    try:
        return await remove_vote_use_case.execute(
            RemoveVoteRequest(comment_id=comment_id, user_id=payload.user_id)
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
