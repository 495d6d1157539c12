"""Get comments use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from showtalk.application.usecase.base import BaseUseCase
from showtalk.config import CommentSettings
from showtalk.domain.model import Comment
from showtalk.domain.service import (
    CommentService,
    DiscussionService,
    JWTService,
    ReactionService,
    VoteService,
)
from showtalk.domain.service.comment_tree import (
    build_tree,
    compute_stats,
    paginate_roots,
    sort_roots,
)
from showtalk.domain.value import DiscussionId, SortMode, UserId

from .node import CommentNodeResponse, CommentStatsResponse, PaginationResponse


class GetCommentsRequest(BaseModel):
    """Get comments request."""

    discussion_id: str  # UUID string
    sort: SortMode = SortMode.NEW
    limit: int | None = Field(default=None, ge=1)  # Defaults from settings
    offset: int = Field(default=0, ge=0)
    tree: bool = True  # False returns top-level comments without replies
    max_depth: int | None = Field(default=None, ge=0)  # Defaults from settings
    auth_token: str | None = None  # JWT token for viewer state (optional)


class GetCommentsResponse(BaseModel):
    """Get comments response.

    stats is None for sub-thread fetches.
    """

    comments: list[CommentNodeResponse]
    stats: CommentStatsResponse | None
    pagination: PaginationResponse


async def load_thread_context(
    comments: list[Comment],
    viewer_id: UserId | None,
    vote_service: VoteService,
    reaction_service: ReactionService,
) -> dict:
    """Batch-load tallies, the viewer's votes and reactions for build_tree.

    Args:
        comments: Comments being rendered
        viewer_id: Current user (None for anonymous visitors)
        vote_service: Vote domain service
        reaction_service: Reaction domain service

    Returns:
        Keyword arguments for build_tree
    """
    comment_ids = [comment.id for comment in comments]
    user_votes = (
        await vote_service.get_user_votes(viewer_id, comment_ids) if viewer_id else {}
    )
    return {
        "tallies": await vote_service.get_tallies(comment_ids),
        "user_votes": user_votes,
        "reactions": await reaction_service.get_reactions(comment_ids, viewer_id),
    }


def resolve_limit(limit: int | None, settings: CommentSettings) -> int:
    """Apply the default page size and the hard cap."""
    return min(limit or settings.default_limit, settings.max_limit)


class GetCommentsUseCase(BaseUseCase[GetCommentsRequest, GetCommentsResponse]):
    """Use case for reading a page of a discussion's comment threads."""

    def __init__(
        self,
        comment_service: CommentService,
        discussion_service: DiscussionService,
        vote_service: VoteService,
        reaction_service: ReactionService,
        jwt_service: JWTService,
        comment_settings: CommentSettings,
    ) -> None:
        """Initialize get comments use case.

        Args:
            comment_service: Comment domain service
            discussion_service: Discussion domain service
            vote_service: Vote service for tallies and viewer votes
            reaction_service: Reaction service for reaction summaries
            jwt_service: JWT service for decoding auth tokens
            comment_settings: Page size and depth defaults
        """
        self.comment_service = comment_service
        self.discussion_service = discussion_service
        self.vote_service = vote_service
        self.reaction_service = reaction_service
        self.jwt_service = jwt_service
        self.comment_settings = comment_settings

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Steps:
        1. Verify discussion exists and load all of its comments
        2. Load vote tallies, viewer votes and reactions in batch
        3. Build the reply tree, capped at max_depth below each root
        4. Sort roots, take the requested page and count stats

        Args:
            request: Get comments request

        Returns:
            Page of root comments with nested replies

        Raises:
            NotFoundError: If the discussion doesn't exist
        """
        discussion_id = DiscussionId(UUID(request.discussion_id))
        await self.discussion_service.get_discussion_by_id(discussion_id)

        comments = await self.comment_service.get_comments_for_discussion(
            discussion_id
        )

        payload = self.jwt_service.get_payload_from_token(request.auth_token)
        viewer_id = UserId(UUID(payload.user_id)) if payload else None
        context = await load_thread_context(
            comments, viewer_id, self.vote_service, self.reaction_service
        )

        if not request.tree:
            max_depth = 0
        elif request.max_depth is not None:
            max_depth = request.max_depth
        else:
            max_depth = self.comment_settings.default_max_depth

        roots = build_tree(comments, max_depth, **context)
        ordered = sort_roots(
            roots,
            request.sort,
            engagement_weight=self.comment_settings.best_engagement_weight,
        )
        limit = resolve_limit(request.limit, self.comment_settings)
        page = paginate_roots(ordered, request.offset, limit)
        stats = compute_stats(comments)

        logfire.info(
            "Comments page built",
            discussion_id=str(discussion_id),
            sort=request.sort.value,
            roots=len(page.items),
            total=stats.total_comments,
            has_more=page.has_more,
        )

        return GetCommentsResponse(
            comments=[CommentNodeResponse.from_domain(node) for node in page.items],
            stats=CommentStatsResponse(**stats.model_dump()),
            pagination=PaginationResponse(
                limit=page.limit, offset=page.offset, has_more=page.has_more
            ),
        )
