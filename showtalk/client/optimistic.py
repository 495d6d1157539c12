"""Optimistic updates with rollback on failure."""

from collections.abc import Awaitable, Callable
from typing import Any, Protocol

import logfire

from .error import CommentsAPIError
from .state import ThreadState


class StateHolder(Protocol):
    state: ThreadState


async def run_optimistic(
    store: StateHolder,
    apply: Callable[[ThreadState], ThreadState],
    send: Callable[[], Awaitable[Any]],
    reconcile: Callable[[ThreadState, Any], ThreadState] | None = None,
    undo: Callable[[ThreadState], ThreadState] | None = None,
    *,
    name: str = "optimistic_command",
) -> bool:
    """Apply a change locally, send it, and undo it if the request fails.

    Other commands may settle while this one is in flight, so a failure
    reverts only this command's own change through undo, applied to the
    snapshot current at that time. Errors are logged and never raised.

    Args:
        store: Holder of the current snapshot
        apply: Local change shown immediately
        send: Request to the server
        reconcile: Merge of the server's answer into the current snapshot
        undo: Inverse of apply; None when apply leaves the snapshot alone
        name: Label used in logs

    Returns:
        True if the server accepted the change, False if it was rolled back
    """
    store.state = apply(store.state)

    try:
        result = await send()
    except CommentsAPIError as e:
        if undo is not None:
            store.state = undo(store.state)
        logfire.warn(
            "Optimistic update rolled back",
            command=name,
            status_code=e.status_code,
            error=str(e),
        )
        return False

    if reconcile is not None:
        store.state = reconcile(store.state, result)
    return True


class OptimisticCommand:
    """A named, reusable optimistic change."""

    def __init__(
        self,
        name: str,
        apply: Callable[[ThreadState], ThreadState],
        send: Callable[[], Awaitable[Any]],
        reconcile: Callable[[ThreadState, Any], ThreadState] | None = None,
        undo: Callable[[ThreadState], ThreadState] | None = None,
    ) -> None:
        self.name = name
        self.apply = apply
        self.send = send
        self.reconcile = reconcile
        self.undo = undo

    async def run(self, store: StateHolder) -> bool:
        return await run_optimistic(
            store, self.apply, self.send, self.reconcile, self.undo, name=self.name
        )
