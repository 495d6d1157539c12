"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from showtalk.domain.model import Comment, Discussion, Reaction, ReactionType, Vote
from showtalk.domain.value import (
    CommentId,
    DiscussionEntityType,
    DiscussionId,
    ReactionId,
    ReactionTypeId,
    UserId,
    VoteId,
    VoteValue,
)
from showtalk.domain.value.types import Handle

# Column labels used when reaction rows are joined with their type
REACTION_TYPE_LABELS = {
    "reaction_type_id": "id",
    "reaction_type_name": "name",
    "reaction_type_description": "description",
    "reaction_type_emoji": "emoji",
    "reaction_type_category": "category",
}


def _uuid(value: Any) -> UUID:
    """asyncpg returns UUID objects, other drivers may return strings."""
    return UUID(value) if isinstance(value, str) else value


def row_to_discussion(row: Dict[str, Any]) -> Discussion:
    """Convert database row to Discussion domain model.

    Args:
        row: Database row as dict

    Returns:
        Discussion domain model
    """
    return Discussion(
        id=DiscussionId(_uuid(row["id"])),
        entity_type=DiscussionEntityType(row["entity_type"]),
        entity_id=row["entity_id"],
        author_id=UserId(_uuid(row["author_id"])),
        title=row["title"],
        content=row.get("content") or "",
        spoiler=row.get("spoiler", False),
        created_at=row["created_at"],
    )


def discussion_to_dict(discussion: Discussion) -> Dict[str, Any]:
    """Convert Discussion domain model to database dict."""
    return {**discussion.model_dump(), "entity_type": discussion.entity_type.value}


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(_uuid(row["id"])),
        discussion_id=DiscussionId(_uuid(row["discussion_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        author_handle=Handle(row["author_handle"]),
        content=row["content"],
        parent_id=CommentId(_uuid(row["parent_id"])) if row.get("parent_id") else None,
        depth=row["depth"],
        path=row.get("path") or "",
        spoiler=row.get("spoiler", False),
        is_deleted=row.get("is_deleted", False),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion/update
    """
    # Handle is a RootModel, so model_dump() yields the plain string
    return comment.model_dump()


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model.

    Args:
        row: Database row as dict

    Returns:
        Vote domain model
    """
    return Vote(
        id=VoteId(_uuid(row["id"])),
        comment_id=CommentId(_uuid(row["comment_id"])),
        user_id=UserId(_uuid(row["user_id"])),
        value=VoteValue(row["value"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict."""
    return {**vote.model_dump(), "value": vote.value.value}


def row_to_reaction_type(row: Dict[str, Any]) -> ReactionType:
    """Convert database row to ReactionType domain model."""
    return ReactionType(
        id=ReactionTypeId(_uuid(row["id"])),
        name=row["name"],
        description=row.get("description") or "",
        emoji=row.get("emoji"),
        category=row.get("category"),
    )


def row_to_reaction(row: Dict[str, Any]) -> Reaction:
    """Convert a reaction row joined with its type to Reaction domain model.

    The joined type columns are expected under the REACTION_TYPE_LABELS keys.

    Args:
        row: Database row as dict

    Returns:
        Reaction domain model
    """
    type_row = {column: row[label] for label, column in REACTION_TYPE_LABELS.items()}
    return Reaction(
        id=ReactionId(_uuid(row["id"])),
        comment_id=CommentId(_uuid(row["comment_id"])),
        user_id=UserId(_uuid(row["user_id"])),
        reaction_type=row_to_reaction_type(type_row),
        created_at=row["created_at"],
    )


def reaction_to_dict(reaction: Reaction) -> Dict[str, Any]:
    """Convert Reaction domain model to database dict."""
    return {
        "id": reaction.id,
        "comment_id": reaction.comment_id,
        "user_id": reaction.user_id,
        "reaction_type_id": reaction.reaction_type.id,
        "created_at": reaction.created_at,
    }
