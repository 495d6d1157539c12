"""Per-session thread store.

Holds the current ThreadState plus view state (collapsed comments and the
reply composer) and routes every change through an optimistic command.
"""

from collections.abc import Callable
from datetime import datetime, timezone
from uuid import uuid4

import logfire
from pydantic import BaseModel

from showtalk.domain.value import SortMode, VoteValue

from .api import CommentPayload, CommentsAPIClient, ReactionPayload, VotePayload
from .optimistic import OptimisticCommand
from .state import ReactionCount, ThreadEntry, ThreadState

TEMP_ID_PREFIX = "temp-"


def _restore_reaction(
    comment_id: str, previous: ReactionCount | None
) -> Callable[[ThreadState], ThreadState]:
    def undo(state: ThreadState) -> ThreadState:
        if previous is None:
            return state.without_reaction(comment_id)
        return state.with_reaction(comment_id, previous.reaction_type)

    return undo


class Composer(BaseModel):
    """Open reply box."""

    parent_id: str | None = None  # None replies to the discussion itself
    draft: str = ""


class ThreadStore:
    """Thread of one discussion as seen by one user session."""

    def __init__(
        self,
        api: CommentsAPIClient,
        discussion_id: str,
        author_id: str = "",
        author_handle: str = "",
        sort: SortMode = SortMode.NEW,
        page_size: int | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            api: Comments API client
            discussion_id: Discussion shown by this store
            author_id: Current user, stamped on locally created replies
            author_handle: Current user's handle
            sort: Root comment ordering
            page_size: Roots per page (server default if None)
        """
        self.api = api
        self.discussion_id = discussion_id
        self.author_id = author_id
        self.author_handle = author_handle
        self.sort = SortMode(sort)
        self.page_size = page_size
        self.state = ThreadState(discussion_id=discussion_id)
        self.composer: Composer | None = None
        self._collapsed: dict[str, bool] = {}

    async def _run(self, command: OptimisticCommand) -> bool:
        return await command.run(self)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def load(self) -> bool:
        """Load the first page, replacing the current snapshot."""
        return await self._run(
            OptimisticCommand(
                "load",
                apply=lambda state: state,
                send=lambda: self.api.fetch_comments(
                    self.discussion_id, sort=self.sort, limit=self.page_size
                ),
                reconcile=lambda state, page: ThreadState.from_page(
                    self.discussion_id, page
                ),
            )
        )

    async def load_more(self) -> bool:
        """Append the next page of roots; no-op when everything is loaded."""
        if not self.state.has_more:
            return False
        return await self._run(
            OptimisticCommand(
                "load_more",
                apply=lambda state: state,
                send=lambda: self.api.fetch_comments(
                    self.discussion_id,
                    sort=self.sort,
                    limit=self.page_size,
                    offset=self.state.next_offset,
                ),
                reconcile=lambda state, page: state.with_page(page),
            )
        )

    async def continue_thread(self, parent_id: str) -> bool:
        """Load the replies cut off below parent_id."""
        return await self._run(
            OptimisticCommand(
                "continue_thread",
                apply=lambda state: state,
                send=lambda: self.api.fetch_subthread(self.discussion_id, parent_id),
                reconcile=lambda state, page: state.with_subthread(parent_id, page),
            )
        )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def _refuse(self, comment_id: str, action: str, allowed: bool) -> bool:
        if allowed:
            return False
        logfire.info("Action refused locally", action=action, comment_id=comment_id)
        return True

    async def submit_reply(
        self, content: str, parent_id: str | None = None, spoiler: bool = False
    ) -> bool:
        """Post a reply, showing it immediately under its parent.

        A temporary entry is shown until the server answers; it is then
        replaced in place by the stored comment, or removed on failure.
        """
        parent = self.state.get(parent_id) if parent_id else None
        if parent_id and parent is not None:
            if self._refuse(parent_id, "reply", parent.can_reply):
                return False

        temp = ThreadEntry(
            id=f"{TEMP_ID_PREFIX}{uuid4()}",
            discussion_id=self.discussion_id,
            author_id=self.author_id,
            author_handle=self.author_handle,
            content=content.strip(),
            parent_id=parent_id,
            depth=parent.depth + 1 if parent else 0,
            spoiler=spoiler,
            created_at=datetime.now(timezone.utc),
            pending=True,
        )

        def reconcile(state: ThreadState, comment: CommentPayload) -> ThreadState:
            return state.with_replaced_entry(
                temp.id, ThreadEntry.from_payload(comment).model_copy(
                    update={"depth": temp.depth}
                )
            )

        accepted = await self._run(
            OptimisticCommand(
                "submit_reply",
                apply=lambda state: state.with_reply(temp),
                send=lambda: self.api.add_comment(
                    self.discussion_id, content, parent_id=parent_id, spoiler=spoiler
                ),
                reconcile=reconcile,
                undo=lambda state: state.without_entry(temp.id),
            )
        )
        if accepted and self.composer and self.composer.parent_id == parent_id:
            self.composer = None
        return accepted

    async def vote(self, comment_id: str, value: VoteValue | None) -> bool:
        """Cast, switch or (with None) clear the viewer's vote."""
        entry = self.state.get(comment_id)
        if entry is None or self._refuse(comment_id, "vote", entry.can_vote):
            return False

        if value is None:
            return await self._run(
                OptimisticCommand(
                    "remove_vote",
                    apply=lambda state: state.with_vote(comment_id, None),
                    send=lambda: self.api.remove_vote(comment_id),
                    undo=lambda state: state.with_vote(comment_id, entry.user_vote),
                )
            )

        def reconcile(state: ThreadState, result: VotePayload) -> ThreadState:
            return state.with_tally(
                comment_id, result.score, result.upvotes, result.downvotes
            )

        return await self._run(
            OptimisticCommand(
                "vote",
                apply=lambda state: state.with_vote(comment_id, value),
                send=lambda: self.api.vote(comment_id, value),
                reconcile=reconcile,
                undo=lambda state: state.with_vote(comment_id, entry.user_vote),
            )
        )

    async def react(self, comment_id: str, reaction_type_id: str) -> bool:
        """Pick a reaction; the type must already be known to the caller.

        The reaction type is looked up among the entry's reactions first, so
        switching to a type someone else picked is shown immediately; an
        unseen type is shown once the server confirms it.
        """
        entry = self.state.get(comment_id)
        if entry is None or self._refuse(comment_id, "react", entry.can_react):
            return False

        known = next(
            (
                r.reaction_type
                for r in entry.reactions
                if r.reaction_type.id == reaction_type_id
            ),
            None,
        )

        def apply(state: ThreadState) -> ThreadState:
            if known is None:
                return state.without_reaction(comment_id)
            return state.with_reaction(comment_id, known)

        def reconcile(state: ThreadState, result: ReactionPayload) -> ThreadState:
            return state.with_reaction(comment_id, result.reaction_type)

        return await self._run(
            OptimisticCommand(
                "react",
                apply=apply,
                send=lambda: self.api.react(comment_id, reaction_type_id),
                reconcile=reconcile,
                undo=_restore_reaction(comment_id, entry.viewer_reaction),
            )
        )

    async def remove_reaction(self, comment_id: str) -> bool:
        entry = self.state.get(comment_id)
        if entry is None:
            return False
        return await self._run(
            OptimisticCommand(
                "remove_reaction",
                apply=lambda state: state.without_reaction(comment_id),
                send=lambda: self.api.remove_reaction(comment_id),
                undo=_restore_reaction(comment_id, entry.viewer_reaction),
            )
        )

    async def delete(self, comment_id: str) -> bool:
        """Soft delete one of the viewer's comments.

        Replies still waiting for the server have no id to delete yet.
        """
        entry = self.state.get(comment_id)
        if entry is None or entry.is_deleted:
            return False
        if self._refuse(comment_id, "delete", not entry.pending):
            return False
        return await self._run(
            OptimisticCommand(
                "delete",
                apply=lambda state: state.with_deleted(comment_id),
                send=lambda: self.api.delete_comment(comment_id),
                undo=lambda state: state.with_restored(entry, "is_deleted", "content"),
            )
        )

    # ------------------------------------------------------------------
    # View state
    # ------------------------------------------------------------------

    def is_collapsed(self, comment_id: str) -> bool:
        """Replies start collapsed, roots start expanded."""
        if comment_id in self._collapsed:
            return self._collapsed[comment_id]
        entry = self.state.get(comment_id)
        return entry is not None and entry.parent_id is not None

    def toggle_collapsed(self, comment_id: str) -> bool:
        collapsed = not self.is_collapsed(comment_id)
        self._collapsed[comment_id] = collapsed
        return collapsed

    def open_composer(self, parent_id: str | None = None) -> Composer:
        """Open the reply box; reopening for another comment discards the draft."""
        if self.composer is None or self.composer.parent_id != parent_id:
            self.composer = Composer(parent_id=parent_id)
        return self.composer

    def update_draft(self, text: str) -> None:
        if self.composer is not None:
            self.composer = self.composer.model_copy(update={"draft": text})

    def cancel_composer(self) -> None:
        self.composer = None

    async def submit_composer(self, spoiler: bool = False) -> bool:
        """Send the open composer's draft as a reply."""
        if self.composer is None or not self.composer.draft.strip():
            return False
        return await self.submit_reply(
            self.composer.draft, parent_id=self.composer.parent_id, spoiler=spoiler
        )
