"""Comment use cases."""

from .create_comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
)
from .delete_comment import (
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
)
from .get_comments import GetCommentsRequest, GetCommentsResponse, GetCommentsUseCase
from .get_subthread import GetSubthreadRequest, GetSubthreadUseCase
from .node import CommentNodeResponse, CommentStatsResponse, PaginationResponse

__all__ = [
    "CommentNodeResponse",
    "CommentStatsResponse",
    "CreateCommentRequest",
    "CreateCommentResponse",
    "CreateCommentUseCase",
    "DeleteCommentRequest",
    "DeleteCommentResponse",
    "DeleteCommentUseCase",
    "GetCommentsRequest",
    "GetCommentsResponse",
    "GetCommentsUseCase",
    "GetSubthreadRequest",
    "GetSubthreadUseCase",
    "PaginationResponse",
]
