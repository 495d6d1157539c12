"""Create comment use case."""

from uuid import UUID

from pydantic import BaseModel

from showtalk.application.usecase.base import BaseUseCase
from showtalk.domain.model import CommentTreeNode
from showtalk.domain.service import CommentService, DiscussionService
from showtalk.domain.value import CommentId, DiscussionId, UserId
from showtalk.domain.value.types import Handle

from .node import CommentNodeResponse


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    discussion_id: str  # UUID string
    content: str
    author_id: str  # User ID from authenticated user
    author_handle: Handle  # Handle from authenticated user
    parent_id: str | None = None  # Parent comment ID for replies
    spoiler: bool = False


class CreateCommentResponse(BaseModel):
    """Create comment response.

    The comment comes back in the same shape as thread nodes, with no votes,
    reactions or replies yet.
    """

    comment: CommentNodeResponse


class CreateCommentUseCase(BaseUseCase[CreateCommentRequest, CreateCommentResponse]):
    """Use case for posting a comment or replying to another comment."""

    def __init__(
        self,
        comment_service: CommentService,
        discussion_service: DiscussionService,
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            discussion_service: Discussion domain service
        """
        self.comment_service = comment_service
        self.discussion_service = discussion_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Steps:
        1. Verify discussion exists
        2. Create comment via comment service (validates parent if replying)

        Args:
            request: Create comment request

        Returns:
            Create comment response with the new comment

        Raises:
            NotFoundError: If discussion or parent comment not found
            ValueError: If content is empty or too long
            BusinessRuleViolationError: If the parent is in another discussion
                or the reply nests too deep
        """
        discussion_id = DiscussionId(UUID(request.discussion_id))
        await self.discussion_service.get_discussion_by_id(discussion_id)

        comment = await self.comment_service.create_comment(
            discussion_id=discussion_id,
            author_id=UserId(UUID(request.author_id)),
            author_handle=request.author_handle,
            content=request.content,
            parent_id=CommentId(UUID(request.parent_id)) if request.parent_id else None,
            spoiler=request.spoiler,
        )

        return CreateCommentResponse(
            comment=CommentNodeResponse.from_domain(CommentTreeNode(comment=comment))
        )
