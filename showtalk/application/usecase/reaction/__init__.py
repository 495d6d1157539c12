"""Reaction use cases."""

from .list_reaction_types import (
    ListReactionTypesResponse,
    ListReactionTypesUseCase,
    ReactionTypeItem,
)
from .react_comment import (
    ReactCommentRequest,
    ReactCommentResponse,
    ReactCommentUseCase,
    ReactionItem,
)
from .remove_reaction import (
    RemoveReactionRequest,
    RemoveReactionResponse,
    RemoveReactionUseCase,
)

__all__ = [
    "ListReactionTypesResponse",
    "ListReactionTypesUseCase",
    "ReactCommentRequest",
    "ReactCommentResponse",
    "ReactCommentUseCase",
    "ReactionItem",
    "ReactionTypeItem",
    "RemoveReactionRequest",
    "RemoveReactionResponse",
    "RemoveReactionUseCase",
]
