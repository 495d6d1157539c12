"""Comment domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from showtalk.config import CommentSettings
from showtalk.domain.error import (
    BusinessRuleViolationError,
    ContentDeletedException,
    NotAuthorizedError,
    NotFoundError,
)
from showtalk.domain.model.comment import MAX_CONTENT_LENGTH, Comment, build_path
from showtalk.domain.repository import CommentRepository
from showtalk.domain.value import CommentId, DiscussionId, UserId
from showtalk.domain.value.types import Handle

from .base import Service


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        comment_settings: CommentSettings,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            comment_settings: Thread limits
        """
        self.comment_repository = comment_repository
        self.comment_settings = comment_settings

    async def create_comment(
        self,
        discussion_id: DiscussionId,
        author_id: UserId,
        author_handle: Handle,
        content: str,
        parent_id: CommentId | None = None,
        spoiler: bool = False,
    ) -> Comment:
        """Create a top-level comment or reply to another comment.

        Args:
            discussion_id: Discussion ID
            author_id: Author user ID
            author_handle: Author handle
            content: Comment text (surrounding whitespace is stripped)
            parent_id: Parent comment ID for replies (None for top-level)
            spoiler: Whether the comment hides spoilers

        Returns:
            Created comment with depth and path set

        Raises:
            ValueError: If content is empty or too long
            NotFoundError: If the parent comment doesn't exist
            BusinessRuleViolationError: If the parent belongs to another
                discussion or the reply would nest too deep
            ContentDeletedException: If the parent has been deleted
        """
        with logfire.span(
            "comment_service.create_comment",
            discussion_id=str(discussion_id),
            author_id=str(author_id),
            author_handle=author_handle.root,
            parent_id=str(parent_id) if parent_id else None,
        ):
            content = content.strip()
            if not content:
                raise ValueError("Content is required")
            if len(content) > MAX_CONTENT_LENGTH:
                raise ValueError(
                    f"Content must be at most {MAX_CONTENT_LENGTH} characters"
                )

            comment_id = CommentId(uuid4())
            depth = 0
            path = build_path(comment_id)
            if parent_id:
                parent = await self.comment_repository.find_by_id(parent_id)
                if not parent:
                    logfire.error(
                        "Parent comment not found",
                        parent_id=str(parent_id),
                        discussion_id=str(discussion_id),
                    )
                    raise NotFoundError("Comment", str(parent_id))
                if parent.discussion_id != discussion_id:
                    logfire.error(
                        "Parent comment does not belong to discussion",
                        parent_id=str(parent_id),
                        parent_discussion_id=str(parent.discussion_id),
                        target_discussion_id=str(discussion_id),
                    )
                    raise BusinessRuleViolationError(
                        "Parent comment does not belong to this discussion"
                    )
                if parent.is_deleted:
                    logfire.warn("Reply to deleted comment", parent_id=str(parent_id))
                    raise ContentDeletedException("comment", str(parent_id))

                depth = parent.depth + 1
                if depth > self.comment_settings.max_nesting_depth:
                    logfire.warn(
                        "Comment nesting too deep",
                        parent_id=str(parent_id),
                        depth=depth,
                    )
                    raise BusinessRuleViolationError("Comment nesting too deep")
                path = build_path(comment_id, parent.path)

            now = datetime.now()
            comment = Comment(
                id=comment_id,
                discussion_id=discussion_id,
                author_id=author_id,
                author_handle=author_handle,
                content=content,
                parent_id=parent_id,
                depth=depth,
                path=path,
                spoiler=spoiler,
                created_at=now,
                updated_at=now,
            )

            saved = await self.comment_repository.save(comment)
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                discussion_id=str(discussion_id),
                author_handle=author_handle.root,
                depth=depth,
            )
            return saved

    async def get_comments_for_discussion(
        self, discussion_id: DiscussionId
    ) -> list[Comment]:
        """Get all comments of a discussion in tree order.

        Deleted comments are included so their replies stay anchored.

        Args:
            discussion_id: Discussion ID

        Returns:
            List of comments in tree order
        """
        with logfire.span(
            "comment_service.get_comments_for_discussion",
            discussion_id=str(discussion_id),
        ):
            comments = await self.comment_repository.find_by_discussion(discussion_id)
            logfire.info(
                "Comments retrieved for discussion",
                discussion_id=str(discussion_id),
                count=len(comments),
            )
            return comments

    async def get_subtree(self, root: Comment) -> list[Comment]:
        """Get a comment and all of its descendants.

        Args:
            root: The comment at the top of the branch

        Returns:
            The root followed by its descendants in tree order
        """
        with logfire.span("comment_service.get_subtree", comment_id=str(root.id)):
            comments = await self.comment_repository.find_subtree(root)
            logfire.info(
                "Comment subtree retrieved",
                comment_id=str(root.id),
                count=len(comments),
            )
            return comments

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment | None:
        """Get a comment by ID.

        Args:
            comment_id: Comment ID

        Returns:
            Comment if found, None otherwise
        """
        with logfire.span(
            "comment_service.get_comment_by_id", comment_id=str(comment_id)
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment:
                logfire.info("Comment found", comment_id=str(comment_id))
            else:
                logfire.warn("Comment not found", comment_id=str(comment_id))
            return comment

    async def get_active_comment(self, comment_id: CommentId) -> Comment:
        """Get a comment that can still receive votes, reactions and replies.

        Raises:
            NotFoundError: If the comment doesn't exist
            ContentDeletedException: If the comment has been deleted
        """
        comment = await self.get_comment_by_id(comment_id)
        if not comment:
            raise NotFoundError("Comment", str(comment_id))
        if comment.is_deleted:
            raise ContentDeletedException("comment", str(comment_id))
        return comment

    async def delete_comment(self, comment_id: CommentId, user_id: UserId) -> Comment:
        """Soft delete a comment.

        The row is kept so replies stay attached; readers see a placeholder.
        Deleting an already deleted comment changes nothing.

        Args:
            comment_id: Comment ID
            user_id: User requesting the deletion

        Returns:
            The deleted comment

        Raises:
            NotFoundError: If the comment doesn't exist
            NotAuthorizedError: If the user is not the author
        """
        with logfire.span(
            "comment_service.delete_comment",
            comment_id=str(comment_id),
            user_id=str(user_id),
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                logfire.warn("Delete of non-existent comment", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))

            if comment.author_id != user_id:
                logfire.warn(
                    "Unauthorized comment delete attempt",
                    comment_id=str(comment_id),
                    author_id=str(comment.author_id),
                    user_id=str(user_id),
                )
                raise NotAuthorizedError("comment", str(comment_id), str(user_id))

            if comment.is_deleted:
                logfire.info("Comment already deleted", comment_id=str(comment_id))
                return comment

            deleted = await self.comment_repository.soft_delete(comment_id)
            if not deleted:
                raise NotFoundError("Comment", str(comment_id))

            logfire.info(
                "Comment deleted",
                comment_id=str(comment_id),
                discussion_id=str(deleted.discussion_id),
            )
            return deleted
