"""Vote use cases."""

from .remove_vote import RemoveVoteRequest, RemoveVoteResponse, RemoveVoteUseCase
from .vote_comment import (
    VoteCommentRequest,
    VoteCommentResponse,
    VoteCommentUseCase,
    VoteItem,
)

__all__ = [
    "RemoveVoteRequest",
    "RemoveVoteResponse",
    "RemoveVoteUseCase",
    "VoteCommentRequest",
    "VoteCommentResponse",
    "VoteCommentUseCase",
    "VoteItem",
]
