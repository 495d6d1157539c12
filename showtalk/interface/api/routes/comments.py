"""Comment thread routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, HTTPException, Query, status
from pydantic import BaseModel, Field

from showtalk.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
    GetSubthreadRequest,
    GetSubthreadUseCase,
)
from showtalk.domain.error import (
    BusinessRuleViolationError,
    ContentDeletedException,
    NotAuthorizedError,
    NotFoundError,
)
from showtalk.domain.model.comment import MAX_CONTENT_LENGTH
from showtalk.domain.service import JWTService
from showtalk.domain.value import SortMode
from showtalk.domain.value.types import Handle
from showtalk.interface.api.auth import require_user, resolve_token

router = APIRouter(prefix="/discussions", tags=["comments"], route_class=DishkaRoute)


@router.get("/{discussion_id}/comments", response_model=GetCommentsResponse)
async def get_comments(
    discussion_id: str,
    get_comments_use_case: FromDishka[GetCommentsUseCase],
    get_subthread_use_case: FromDishka[GetSubthreadUseCase],
    sort: SortMode = SortMode.NEW,
    limit: int | None = Query(default=None, ge=1),
    offset: int = Query(default=0, ge=0),
    tree: bool = True,
    max_depth: int | None = Query(default=None, ge=0),
    parent_id: str | None = None,
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> GetCommentsResponse:
    """Get a page of a discussion's comment threads.

    Top-level comments are sorted and paginated; replies are nested below
    them down to max_depth. With parent_id the replies below that comment
    are returned instead ("continue this thread"), without stats.

    If authenticated, includes the caller's votes and reactions.

    Args:
        discussion_id: Discussion UUID
        get_comments_use_case: Get comments use case from DI
        get_subthread_use_case: Get sub-thread use case from DI
        sort: new, top or best
        limit: Page size (capped by configuration)
        offset: Number of top-level comments (or replies) to skip
        tree: False returns top-level comments without replies
        max_depth: Reply levels rendered below each root
        parent_id: Comment to expand instead of listing the discussion
        auth_token: JWT token from cookie (optional)
        authorization: Bearer token header (optional)

    Returns:
        Comments, stats and pagination
    """
    token = resolve_token(auth_token, authorization)
    try:
        if parent_id:
            return await get_subthread_use_case.execute(
                GetSubthreadRequest(
                    discussion_id=discussion_id,
                    parent_id=parent_id,
                    limit=limit,
                    offset=offset,
                    max_depth=max_depth,
                    auth_token=token,
                )
            )
        return await get_comments_use_case.execute(
            GetCommentsRequest(
                discussion_id=discussion_id,
                sort=sort,
                limit=limit,
                offset=offset,
                tree=tree,
                max_depth=max_depth,
                auth_token=token,
            )
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    discussion_id: str
    content: str = Field(min_length=1, max_length=MAX_CONTENT_LENGTH)
    parent_id: str | None = None  # Parent comment ID for replies
    spoiler: bool = False


@router.post(
    "/comments",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> CreateCommentResponse:
    """Create a comment on a discussion or reply to another comment.

    Requires authentication.

    Raises:
        HTTPException: 401 if not authenticated, 404 if the discussion or
            parent is missing, 409 if the parent was deleted, 400 on
            validation failures
    """
    payload = require_user(
        jwt_service, resolve_token(auth_token, authorization), "post comments"
    )

    try:
        use_case_request = CreateCommentRequest(
            discussion_id=request.discussion_id,
            content=request.content,
            author_id=payload.user_id,
            author_handle=Handle(payload.handle),
            parent_id=request.parent_id,
            spoiler=request.spoiler,
        )
        return await create_comment_use_case.execute(use_case_request)
    except NotFoundError as e:
        logfire.warn("Comment creation failed - not found", error=str(e))
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ContentDeletedException as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except (BusinessRuleViolationError, ValueError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/comments/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: str,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> DeleteCommentResponse:
    """Soft delete a comment.

    Only the comment author can delete. Replies stay in place below a
    "[comment deleted]" placeholder.

    Raises:
        HTTPException: 401 if not authenticated, 403 if not the author,
            404 if the comment doesn't exist
    """
    payload = require_user(
        jwt_service, resolve_token(auth_token, authorization), "delete comments"
    )

    try:
        return await delete_comment_use_case.execute(
            DeleteCommentRequest(comment_id=comment_id, user_id=payload.user_id)
        )
    except NotAuthorizedError as e:
        logfire.warn("Unauthorized comment delete attempt", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to delete this comment",
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
