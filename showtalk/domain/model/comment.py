"""Comment entity.

Comments are threaded replies inside a discussion. They carry a materialized
path so a whole branch can be fetched with a single prefix query.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field, model_validator

from showtalk.domain.model.common import DomainModel
from showtalk.domain.value import CommentId, DiscussionId, UserId
from showtalk.domain.value.types import Handle

PATH_SEPARATOR = "/"

MAX_CONTENT_LENGTH = 10000


def build_path(comment_id: CommentId, parent_path: str | None = None) -> str:
    """Build the materialized path for a comment.

    Args:
        comment_id: The comment's own ID
        parent_path: The parent's path (None for top-level comments)

    Returns:
        Slash-joined ancestor IDs followed by the comment's own ID
    """
    if parent_path:
        return f"{parent_path}{PATH_SEPARATOR}{comment_id}"
    return str(comment_id)


class Comment(DomainModel):
    """Comment entity.

    Threading is managed through:
    - parent_id: Direct parent comment (None for top-level)
    - depth: Nesting level (0 for top-level, increments with each reply)
    - path: Ancestor IDs plus own ID joined by "/", so depth == segments - 1

    Comments are never hard-deleted. Deleting sets is_deleted and the
    content is replaced by a placeholder at render time, which keeps
    replies addressable.
    """

    id: CommentId
    discussion_id: DiscussionId
    author_id: UserId
    author_handle: Handle
    content: str = Field(min_length=1, max_length=MAX_CONTENT_LENGTH)
    parent_id: Optional[CommentId] = None
    depth: int = Field(default=0, ge=0)
    path: str = ""
    spoiler: bool = False
    is_deleted: bool = False
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def check_path_matches_depth(self) -> "Comment":
        """Reject a path whose ancestor count disagrees with depth."""
        if self.path and len(self.path.split(PATH_SEPARATOR)) - 1 != self.depth:
            raise ValueError(
                f"Path {self.path!r} encodes a different depth than {self.depth}"
            )
        if self.parent_id is None and self.depth != 0:
            raise ValueError("Top-level comments must have depth 0")
        return self

    @property
    def ancestor_ids(self) -> list[CommentId]:
        """Ancestor IDs from the root down to the direct parent."""
        if not self.path:
            return []
        return [CommentId(UUID(part)) for part in self.path.split(PATH_SEPARATOR)[:-1]]
