"""Domain services."""

from .base import Service
from .comment_service import CommentService
from .discussion_service import DiscussionService
from .jwt_service import JWTService
from .reaction_service import ReactionService
from .vote_service import VoteService

__all__ = [
    "CommentService",
    "DiscussionService",
    "JWTService",
    "ReactionService",
    "Service",
    "VoteService",
]
