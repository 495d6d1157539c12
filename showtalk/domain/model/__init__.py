"""Domain model entities for Show Talk."""

from showtalk.domain.model.comment import Comment
from showtalk.domain.model.comment_tree import CommentPage, CommentStats, CommentTreeNode
from showtalk.domain.model.discussion import Discussion
from showtalk.domain.model.reaction import Reaction, ReactionSummary, ReactionType
from showtalk.domain.model.vote import Vote, VoteTally

__all__ = [
    "Discussion",
    "Comment",
    "CommentTreeNode",
    "CommentStats",
    "CommentPage",
    "Vote",
    "VoteTally",
    "Reaction",
    "ReactionType",
    "ReactionSummary",
]
