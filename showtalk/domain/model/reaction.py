"""Reaction entities.

Reactions are emoji-style responses to a comment, picked from a fixed
catalogue of reaction types grouped by category.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from showtalk.domain.model.common import DomainModel
from showtalk.domain.value import CommentId, ReactionId, ReactionTypeId, UserId
from showtalk.domain.value.common import ValueObject

DEFAULT_CATEGORY = "other"


class ReactionType(DomainModel):
    """Catalogue entry for a reaction (e.g. "tea", category "emotional")."""

    id: ReactionTypeId
    name: str = Field(min_length=1, max_length=50)
    description: str = ""
    emoji: Optional[str] = None
    category: Optional[str] = None


class Reaction(DomainModel):
    """A user's reaction to a comment.

    Business rules:
    - One reaction per user per comment (a new one replaces the old one)
    """

    id: ReactionId
    comment_id: CommentId
    user_id: UserId
    reaction_type: ReactionType
    created_at: datetime = Field(default_factory=datetime.now)


class ReactionSummary(ValueObject):
    """Count of one reaction type on a comment, from a viewer's perspective."""

    reaction_type: ReactionType
    count: int
    reacted: bool = False  # Whether the viewer chose this reaction


def summarize_reactions(
    reactions: list[Reaction], viewer_id: UserId | None = None
) -> tuple[ReactionSummary, ...]:
    """Group a comment's reactions by type.

    Types are listed in order of first appearance.

    Args:
        reactions: Reactions on a single comment
        viewer_id: Current user, used to flag their own reaction

    Returns:
        One summary per reaction type present
    """
    counts: dict[ReactionTypeId, int] = {}
    types: dict[ReactionTypeId, ReactionType] = {}
    mine: set[ReactionTypeId] = set()
    for reaction in reactions:
        type_id = reaction.reaction_type.id
        types.setdefault(type_id, reaction.reaction_type)
        counts[type_id] = counts.get(type_id, 0) + 1
        if viewer_id is not None and reaction.user_id == viewer_id:
            mine.add(type_id)

    return tuple(
        ReactionSummary(
            reaction_type=types[type_id],
            count=count,
            reacted=type_id in mine,
        )
        for type_id, count in counts.items()
    )
