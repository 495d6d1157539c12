"""Test configuration and fixtures."""

from datetime import datetime, timedelta
from uuid import uuid4

import logfire

from showtalk.domain.model import Comment, Discussion
from showtalk.domain.model.comment import build_path
from showtalk.domain.value import (
    CommentId,
    DiscussionEntityType,
    DiscussionId,
    UserId,
)
from showtalk.domain.value.types import Handle

# Keep spans and logs local during tests
logfire.configure(send_to_logfire=False, console=False)

BASE_TIME = datetime(2026, 3, 1, 20, 0, 0)


def make_discussion(entity_id: int = 1399) -> Discussion:
    """Helper to build a discussion attached to a show."""
    return Discussion(
        id=DiscussionId(uuid4()),
        entity_type=DiscussionEntityType.SHOW,
        entity_id=entity_id,
        author_id=UserId(uuid4()),
        title="Reunion episode thoughts",
        created_at=BASE_TIME,
    )


def make_comment(
    discussion_id: DiscussionId,
    parent: Comment | None = None,
    *,
    minutes: int = 0,
    author_id: UserId | None = None,
    handle: str = "viewer.showtalk.tv",
    content: str = "Test comment",
    is_deleted: bool = False,
) -> Comment:
    """Helper to build a comment with consistent depth and path.

    Args:
        discussion_id: Discussion the comment belongs to
        parent: Parent comment for replies
        minutes: Offset from BASE_TIME for created_at
        author_id: Author (random if omitted)
        handle: Author handle
        content: Comment text
        is_deleted: Whether the comment is soft deleted
    """
    comment_id = CommentId(uuid4())
    created_at = BASE_TIME + timedelta(minutes=minutes)
    return Comment(
        id=comment_id,
        discussion_id=discussion_id,
        author_id=author_id or UserId(uuid4()),
        author_handle=Handle(root=handle),
        content=content,
        parent_id=parent.id if parent else None,
        depth=parent.depth + 1 if parent else 0,
        path=build_path(comment_id, parent.path if parent else None),
        is_deleted=is_deleted,
        created_at=created_at,
        updated_at=created_at,
    )


def make_comment_payload(
    comment_id: str,
    parent_id: str | None = None,
    replies: list[dict] | None = None,
    **fields,
) -> dict:
    """Helper to build a comment node as the API serializes it.

    Only required fields are set unless overridden, so optional counters
    and collections are exercised through their defaults.
    """
    payload = {
        "id": comment_id,
        "discussion_id": "d-1",
        "author_id": "author-1",
        "author_handle": "fan.showtalk.tv",
        "content": f"Comment {comment_id}",
        "parent_id": parent_id,
        "created_at": BASE_TIME.isoformat(),
        **fields,
    }
    if replies is not None:
        payload["replies"] = replies
    return payload
