"""Client for Show Talk discussion threads."""

from .api import CommentsAPIClient
from .error import AdapterError, CommentsAPIError
from .optimistic import OptimisticCommand, run_optimistic
from .state import ThreadEntry, ThreadNode, ThreadState
from .store import ThreadStore

__all__ = [
    "AdapterError",
    "CommentsAPIClient",
    "CommentsAPIError",
    "OptimisticCommand",
    "ThreadEntry",
    "ThreadNode",
    "ThreadState",
    "ThreadStore",
    "run_optimistic",
]
