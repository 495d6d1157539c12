"""In-memory comment repository for testing."""

from datetime import datetime
from typing import Optional

from showtalk.domain.model.comment import PATH_SEPARATOR, Comment
from showtalk.domain.repository.comment import CommentRepository
from showtalk.domain.value import CommentId, DiscussionId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_by_discussion(self, discussion_id: DiscussionId) -> list[Comment]:
        """Find all comments of a discussion in tree order."""
        comments = [
            c for c in self._comments.values() if c.discussion_id == discussion_id
        ]
        comments.sort(key=lambda c: c.path)
        return comments

    async def find_subtree(self, root: Comment) -> list[Comment]:
        """Find a comment and all of its descendants."""
        prefix = f"{root.path}{PATH_SEPARATOR}"
        comments = [
            c
            for c in self._comments.values()
            if c.id == root.id or c.path.startswith(prefix)
        ]
        comments.sort(key=lambda c: c.path)
        return comments

    async def save(self, comment: Comment) -> Comment:
        """Save or update a comment."""
        self._comments[comment.id] = comment
        return comment

    async def soft_delete(self, comment_id: CommentId) -> Optional[Comment]:
        """Mark a comment as deleted."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return None
        # Comments are immutable, store an updated copy
        deleted = comment.model_copy(
            update={"is_deleted": True, "updated_at": datetime.now()}
        )
        self._comments[comment_id] = deleted
        return deleted
