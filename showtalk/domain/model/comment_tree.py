"""Read-time projections of a discussion's comments.

None of these are persisted; they are rebuilt from flat comment rows on
every fetch.
"""

from typing import Optional

from showtalk.domain.model.comment import Comment
from showtalk.domain.model.common import DomainModel
from showtalk.domain.model.reaction import ReactionSummary
from showtalk.domain.model.vote import VoteTally
from showtalk.domain.value import CommentId, VoteValue
from showtalk.domain.value.common import ValueObject

DELETED_PLACEHOLDER = "[comment deleted]"


class CommentTreeNode(DomainModel):
    """A comment decorated with its replies, score and viewer state.

    depth is relative to the root of the fetch that produced the node: every
    returned root has depth 0 even when the stored comment.depth is larger.
    """

    comment: Comment
    depth: int = 0
    replies: tuple["CommentTreeNode", ...] = ()
    reply_count: int = 0  # Direct children present in the fetched set
    has_more_replies: bool = False  # Children exist beyond the depth cap
    tally: VoteTally = VoteTally()
    user_vote: Optional[VoteValue] = None
    reactions: tuple[ReactionSummary, ...] = ()

    @property
    def id(self) -> CommentId:
        return self.comment.id

    @property
    def score(self) -> int:
        return self.tally.score

    @property
    def is_deleted(self) -> bool:
        return self.comment.is_deleted

    @property
    def content(self) -> str:
        """Displayed content, with deleted comments replaced by a placeholder."""
        return DELETED_PLACEHOLDER if self.comment.is_deleted else self.comment.content

    @property
    def can_reply(self) -> bool:
        return not self.comment.is_deleted

    @property
    def can_vote(self) -> bool:
        return not self.comment.is_deleted

    @property
    def can_react(self) -> bool:
        return not self.comment.is_deleted

    def walk(self):
        """Yield this node and every descendant, depth first."""
        yield self
        for reply in self.replies:
            yield from reply.walk()


class CommentStats(ValueObject):
    """Display counters for a discussion's comments."""

    total_comments: int = 0
    top_level_comments: int = 0
    max_depth: int = 0


class CommentPage(ValueObject):
    """A contiguous slice of sorted root nodes."""

    items: tuple[CommentTreeNode, ...]
    offset: int
    limit: int
    has_more: bool
