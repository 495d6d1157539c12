"""Comment reaction routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, HTTPException, status
from pydantic import BaseModel

from showtalk.application.usecase.reaction import (
    ListReactionTypesResponse,
    ListReactionTypesUseCase,
    ReactCommentRequest,
    ReactCommentResponse,
    ReactCommentUseCase,
    RemoveReactionRequest,
    RemoveReactionResponse,
    RemoveReactionUseCase,
)
from showtalk.domain.error import ContentDeletedException, NotFoundError
from showtalk.domain.service import JWTService
from showtalk.interface.api.auth import require_user, resolve_token

router = APIRouter(tags=["reactions"], route_class=DishkaRoute)


@router.get("/reaction-types", response_model=ListReactionTypesResponse)
async def list_reaction_types(
    list_reaction_types_use_case: FromDishka[ListReactionTypesUseCase],
) -> ListReactionTypesResponse:
    """List available reactions grouped by category."""
    return await list_reaction_types_use_case.execute()


class ReactAPIRequest(BaseModel):
    """API request for reacting to a comment."""

    comment_id: str
    reaction_type_id: str


@router.post("/discussions/comments/reaction", response_model=ReactCommentResponse)
async def react_comment(
    request: ReactAPIRequest,
    react_comment_use_case: FromDishka[ReactCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ReactCommentResponse:
    """React to a comment, replacing the caller's previous reaction.

    Requires authentication.

    Raises:
        HTTPException: 401 if not authenticated, 404 if the comment or
            reaction type doesn't exist, 409 if the comment was deleted
    """
    payload = require_user(jwt_service, resolve_token(auth_token, authorization), "react")

    try:
        return await react_comment_use_case.execute(
            ReactCommentRequest(
                comment_id=request.comment_id,
                reaction_type_id=request.reaction_type_id,
                user_id=payload.user_id,
            )
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ContentDeletedException as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/discussions/comments/reaction", response_model=RemoveReactionResponse)
async def remove_reaction(
    comment_id: str,
    remove_reaction_use_case: FromDishka[RemoveReactionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> RemoveReactionResponse:
    """Remove the caller's reaction from a comment.

    Requires authentication.
    """
    payload = require_user(
        jwt_service, resolve_token(auth_token, authorization), "remove reactions"
    )

    try:
        return await remove_reaction_use_case.execute(
            RemoveReactionRequest(comment_id=comment_id, user_id=payload.user_id)
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
