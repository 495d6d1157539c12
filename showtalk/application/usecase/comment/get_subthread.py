"""Get sub-thread use case ("continue this thread")."""

from uuid import UUID

from pydantic import BaseModel, Field

from showtalk.application.usecase.base import BaseUseCase
from showtalk.config import CommentSettings
from showtalk.domain.error import NotFoundError
from showtalk.domain.service import (
    CommentService,
    JWTService,
    ReactionService,
    VoteService,
)
from showtalk.domain.service.comment_tree import build_tree
from showtalk.domain.value import CommentId, DiscussionId, UserId

from .get_comments import GetCommentsResponse, load_thread_context, resolve_limit
from .node import CommentNodeResponse, PaginationResponse


class GetSubthreadRequest(BaseModel):
    """Get sub-thread request."""

    discussion_id: str  # UUID string
    parent_id: str  # UUID string of the comment to expand
    limit: int | None = Field(default=None, ge=1)  # Direct replies per page
    offset: int = Field(default=0, ge=0)
    max_depth: int | None = Field(default=None, ge=0)
    auth_token: str | None = None


class GetSubthreadUseCase(BaseUseCase[GetSubthreadRequest, GetCommentsResponse]):
    """Use case for loading the replies below a comment.

    Used when a thread was cut off by the depth cap: the parent is returned
    as the only root at depth 0, with its direct replies paginated.
    """

    def __init__(
        self,
        comment_service: CommentService,
        vote_service: VoteService,
        reaction_service: ReactionService,
        jwt_service: JWTService,
        comment_settings: CommentSettings,
    ) -> None:
        """Initialize get sub-thread use case.

        Args:
            comment_service: Comment domain service
            vote_service: Vote service for tallies and viewer votes
            reaction_service: Reaction service for reaction summaries
            jwt_service: JWT service for decoding auth tokens
            comment_settings: Page size and depth defaults
        """
        self.comment_service = comment_service
        self.vote_service = vote_service
        self.reaction_service = reaction_service
        self.jwt_service = jwt_service
        self.comment_settings = comment_settings

    async def execute(self, request: GetSubthreadRequest) -> GetCommentsResponse:
        """Execute get sub-thread flow.

        Args:
            request: Get sub-thread request

        Returns:
            The parent node with a page of its replies; stats is None

        Raises:
            NotFoundError: If the parent doesn't exist in this discussion
        """
        discussion_id = DiscussionId(UUID(request.discussion_id))
        parent_id = CommentId(UUID(request.parent_id))

        parent = await self.comment_service.get_comment_by_id(parent_id)
        if not parent or parent.discussion_id != discussion_id:
            raise NotFoundError("Comment", request.parent_id)

        comments = await self.comment_service.get_subtree(parent)

        payload = self.jwt_service.get_payload_from_token(request.auth_token)
        viewer_id = UserId(UUID(payload.user_id)) if payload else None
        context = await load_thread_context(
            comments, viewer_id, self.vote_service, self.reaction_service
        )

        max_depth = (
            request.max_depth
            if request.max_depth is not None
            else self.comment_settings.default_max_depth
        )
        # The parent is the only comment whose own parent is outside the set
        roots = build_tree(comments, max_depth, **context)
        (root,) = [node for node in roots if node.id == parent_id]

        limit = resolve_limit(request.limit, self.comment_settings)
        replies = root.replies[request.offset : request.offset + limit]
        has_more = request.offset + limit < len(root.replies)
        root = root.model_copy(update={"replies": replies})

        return GetCommentsResponse(
            comments=[CommentNodeResponse.from_domain(root)],
            stats=None,
            pagination=PaginationResponse(
                limit=limit, offset=request.offset, has_more=has_more
            ),
        )
