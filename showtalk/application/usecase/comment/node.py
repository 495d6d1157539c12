"""Response shape of a comment in a thread."""

from datetime import datetime

from pydantic import BaseModel

from showtalk.application.usecase.reaction.list_reaction_types import ReactionTypeItem
from showtalk.domain.model import CommentTreeNode, ReactionSummary
from showtalk.domain.value import VoteValue


class ReactionSummaryItem(BaseModel):
    """Reaction count on a comment."""

    reaction_type: ReactionTypeItem
    count: int
    reacted: bool

    @classmethod
    def from_domain(cls, summary: ReactionSummary) -> "ReactionSummaryItem":
        return cls(
            reaction_type=ReactionTypeItem.from_domain(summary.reaction_type),
            count=summary.count,
            reacted=summary.reacted,
        )


class CommentNodeResponse(BaseModel):
    """Comment with its replies, votes and reactions.

    Recursive structure mirroring the domain tree. Deleted comments carry a
    placeholder instead of their content and refuse replies, votes and
    reactions.
    """

    id: str
    discussion_id: str
    author_id: str
    author_handle: str
    content: str
    parent_id: str | None
    depth: int
    spoiler: bool
    is_deleted: bool
    created_at: datetime
    updated_at: datetime
    score: int
    upvotes: int
    downvotes: int
    user_vote: VoteValue | None
    reactions: list[ReactionSummaryItem]
    reply_count: int
    has_more_replies: bool
    can_reply: bool
    can_vote: bool
    can_react: bool
    replies: list["CommentNodeResponse"]

    @classmethod
    def from_domain(cls, node: CommentTreeNode) -> "CommentNodeResponse":
        """Convert a domain tree node to response model.

        Args:
            node: Domain comment tree node

        Returns:
            API response model with replies recursively converted
        """
        comment = node.comment
        return cls(
            id=str(comment.id),
            discussion_id=str(comment.discussion_id),
            author_id=str(comment.author_id),
            author_handle=comment.author_handle.root,
            content=node.content,
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            depth=node.depth,
            spoiler=comment.spoiler,
            is_deleted=comment.is_deleted,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
            score=node.score,
            upvotes=node.tally.upvotes,
            downvotes=node.tally.downvotes,
            user_vote=node.user_vote,
            reactions=[ReactionSummaryItem.from_domain(r) for r in node.reactions],
            reply_count=node.reply_count,
            has_more_replies=node.has_more_replies,
            can_reply=node.can_reply,
            can_vote=node.can_vote,
            can_react=node.can_react,
            replies=[cls.from_domain(reply) for reply in node.replies],
        )


class CommentStatsResponse(BaseModel):
    """Comment counters of a discussion."""

    total_comments: int
    top_level_comments: int
    max_depth: int


class PaginationResponse(BaseModel):
    """Position of a page of root comments."""

    limit: int
    offset: int
    has_more: bool
