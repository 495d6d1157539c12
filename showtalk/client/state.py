"""Immutable snapshot of a discussion thread held by a client session.

The thread is kept as an arena: flat entries keyed by comment id, a
parent -> children index and the order of the roots. Every mutation returns
a new snapshot so a previous one can be restored as-is.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from showtalk.domain.model.comment_tree import DELETED_PLACEHOLDER
from showtalk.domain.value import VoteValue

from .api import CommentPayload, CommentsPagePayload, ReactionTypePayload

_VOTE_WEIGHT = {VoteValue.UPVOTE: 1, VoteValue.DOWNVOTE: -1, None: 0}


class ReactionCount(BaseModel):
    """Number of users who picked a reaction type on a comment."""

    model_config = ConfigDict(frozen=True)

    reaction_type: ReactionTypePayload
    count: int
    reacted: bool = False


class ThreadEntry(BaseModel):
    """One comment of the thread, without its replies."""

    model_config = ConfigDict(frozen=True)

    id: str
    discussion_id: str
    author_id: str
    author_handle: str
    content: str
    parent_id: str | None = None
    depth: int = 0
    spoiler: bool = False
    is_deleted: bool = False
    created_at: datetime
    score: int = 0
    upvotes: int = 0
    downvotes: int = 0
    user_vote: VoteValue | None = None
    reactions: tuple[ReactionCount, ...] = ()
    reply_count: int = 0
    has_more_replies: bool = False
    pending: bool = False  # Created locally, not yet confirmed by the server

    @classmethod
    def from_payload(cls, payload: CommentPayload, depth_offset: int = 0) -> "ThreadEntry":
        return cls(
            id=payload.id,
            discussion_id=payload.discussion_id,
            author_id=payload.author_id,
            author_handle=payload.author_handle,
            content=payload.content,
            parent_id=payload.parent_id,
            depth=payload.depth + depth_offset,
            spoiler=payload.spoiler,
            is_deleted=payload.is_deleted,
            created_at=payload.created_at,
            score=payload.score,
            upvotes=payload.upvotes,
            downvotes=payload.downvotes,
            user_vote=payload.user_vote,
            reactions=tuple(
                ReactionCount(
                    reaction_type=r.reaction_type, count=r.count, reacted=r.reacted
                )
                for r in payload.reactions
            ),
            reply_count=payload.reply_count,
            has_more_replies=payload.has_more_replies,
        )

    @property
    def can_reply(self) -> bool:
        return not (self.is_deleted or self.pending)

    @property
    def can_vote(self) -> bool:
        return not (self.is_deleted or self.pending)

    @property
    def can_react(self) -> bool:
        return not (self.is_deleted or self.pending)

    @property
    def viewer_reaction(self) -> ReactionCount | None:
        return next((r for r in self.reactions if r.reacted), None)


class ThreadNode(BaseModel):
    """Nested projection of an entry for rendering."""

    model_config = ConfigDict(frozen=True)

    entry: ThreadEntry
    depth: int
    replies: tuple["ThreadNode", ...] = ()


def _without_viewer_reaction(
    reactions: tuple[ReactionCount, ...],
) -> tuple[ReactionCount, ...]:
    result = []
    for reaction in reactions:
        if not reaction.reacted:
            result.append(reaction)
        elif reaction.count > 1:
            result.append(
                reaction.model_copy(update={"count": reaction.count - 1, "reacted": False})
            )
    return tuple(result)


def _flatten(
    nodes: list[CommentPayload],
    entries: dict[str, ThreadEntry],
    children: dict[str, tuple[str, ...]],
    depth_offset: int = 0,
) -> None:
    for node in nodes:
        entries[node.id] = ThreadEntry.from_payload(node, depth_offset)
        children[node.id] = tuple(reply.id for reply in node.replies)
        _flatten(node.replies, entries, children, depth_offset)


class ThreadState(BaseModel):
    """Snapshot of the comments loaded for one discussion."""

    model_config = ConfigDict(frozen=True)

    discussion_id: str
    entries: dict[str, ThreadEntry] = {}
    children: dict[str, tuple[str, ...]] = {}
    roots: tuple[str, ...] = ()
    has_more: bool = False
    next_offset: int = 0

    @classmethod
    def from_page(cls, discussion_id: str, page: CommentsPagePayload) -> "ThreadState":
        """Build a snapshot from the first page of threads."""
        return cls(discussion_id=discussion_id).with_page(page)

    def get(self, comment_id: str) -> ThreadEntry | None:
        return self.entries.get(comment_id)

    def _descendants(self, comment_id: str) -> list[str]:
        found: list[str] = []
        stack = list(self.children.get(comment_id, ()))
        while stack:
            current = stack.pop()
            found.append(current)
            stack.extend(self.children.get(current, ()))
        return found

    def _with_entry(self, entry: ThreadEntry) -> "ThreadState":
        return self.model_copy(update={"entries": {**self.entries, entry.id: entry}})

    def with_page(self, page: CommentsPagePayload) -> "ThreadState":
        """Append a further page of roots.

        Roots already present (e.g. shifted by new comments between pages)
        are not added twice.
        """
        entries = dict(self.entries)
        children = dict(self.children)
        fresh = [node for node in page.comments if node.id not in self.entries]
        _flatten(fresh, entries, children)

        return self.model_copy(
            update={
                "entries": entries,
                "children": children,
                "roots": self.roots + tuple(node.id for node in fresh),
                "has_more": page.pagination.has_more,
                "next_offset": page.pagination.offset + len(page.comments),
            }
        )

    def with_vote(self, comment_id: str, value: VoteValue | None) -> "ThreadState":
        """Set (or with None clear) the viewer's vote and adjust the tally."""
        entry = self.entries.get(comment_id)
        if entry is None or entry.user_vote == value:
            return self

        upvotes, downvotes = entry.upvotes, entry.downvotes
        if entry.user_vote == VoteValue.UPVOTE:
            upvotes -= 1
        elif entry.user_vote == VoteValue.DOWNVOTE:
            downvotes -= 1
        if value == VoteValue.UPVOTE:
            upvotes += 1
        elif value == VoteValue.DOWNVOTE:
            downvotes += 1

        delta = _VOTE_WEIGHT[value] - _VOTE_WEIGHT[entry.user_vote]
        return self._with_entry(
            entry.model_copy(
                update={
                    "user_vote": value,
                    "upvotes": upvotes,
                    "downvotes": downvotes,
                    "score": entry.score + delta,
                }
            )
        )

    def with_tally(
        self, comment_id: str, score: int, upvotes: int, downvotes: int
    ) -> "ThreadState":
        """Overwrite a comment's counters with the server's figures."""
        entry = self.entries.get(comment_id)
        if entry is None:
            return self
        return self._with_entry(
            entry.model_copy(
                update={"score": score, "upvotes": upvotes, "downvotes": downvotes}
            )
        )

    def with_reaction(
        self, comment_id: str, reaction_type: ReactionTypePayload
    ) -> "ThreadState":
        """Make reaction_type the viewer's reaction, replacing any previous one."""
        entry = self.entries.get(comment_id)
        if entry is None:
            return self
        current = entry.viewer_reaction
        if current and current.reaction_type.id == reaction_type.id:
            return self

        reactions = list(_without_viewer_reaction(entry.reactions))
        for index, reaction in enumerate(reactions):
            if reaction.reaction_type.id == reaction_type.id:
                reactions[index] = reaction.model_copy(
                    update={"count": reaction.count + 1, "reacted": True}
                )
                break
        else:
            reactions.append(
                ReactionCount(reaction_type=reaction_type, count=1, reacted=True)
            )

        return self._with_entry(entry.model_copy(update={"reactions": tuple(reactions)}))

    def without_reaction(self, comment_id: str) -> "ThreadState":
        entry = self.entries.get(comment_id)
        if entry is None or entry.viewer_reaction is None:
            return self
        return self._with_entry(
            entry.model_copy(
                update={"reactions": _without_viewer_reaction(entry.reactions)}
            )
        )

    def with_deleted(self, comment_id: str) -> "ThreadState":
        """Mark a comment deleted; its replies stay in place."""
        entry = self.entries.get(comment_id)
        if entry is None or entry.is_deleted:
            return self
        return self._with_entry(
            entry.model_copy(
                update={"is_deleted": True, "content": DELETED_PLACEHOLDER}
            )
        )

    def with_restored(self, previous: ThreadEntry, *fields: str) -> "ThreadState":
        """Copy fields of an earlier version of an entry back onto it."""
        entry = self.entries.get(previous.id)
        if entry is None:
            return self
        return self._with_entry(
            entry.model_copy(update={f: getattr(previous, f) for f in fields})
        )

    def with_reply(self, entry: ThreadEntry) -> "ThreadState":
        """Insert a new comment first under its parent, or first among roots."""
        entries = {**self.entries, entry.id: entry}
        children = {**self.children, entry.id: ()}
        roots = self.roots

        parent = self.entries.get(entry.parent_id) if entry.parent_id else None
        if parent is not None:
            children[parent.id] = (entry.id, *self.children.get(parent.id, ()))
            entries[parent.id] = parent.model_copy(
                update={"reply_count": parent.reply_count + 1}
            )
        else:
            roots = (entry.id, *roots)

        return self.model_copy(
            update={"entries": entries, "children": children, "roots": roots}
        )

    def with_replaced_entry(self, old_id: str, entry: ThreadEntry) -> "ThreadState":
        """Swap an entry for another in the same position.

        Used to replace a locally created comment with the stored one; the
        entry may carry a new id, in which case all references are updated.
        """
        if old_id not in self.entries:
            return self

        def rename(comment_id: str) -> str:
            return entry.id if comment_id == old_id else comment_id

        entries = {}
        for key, value in self.entries.items():
            if key == old_id:
                entries[entry.id] = entry
            elif value.parent_id == old_id:
                entries[key] = value.model_copy(update={"parent_id": entry.id})
            else:
                entries[key] = value

        return self.model_copy(
            update={
                "entries": entries,
                "children": {
                    rename(key): tuple(rename(c) for c in ids)
                    for key, ids in self.children.items()
                },
                "roots": tuple(rename(r) for r in self.roots),
            }
        )

    def without_entry(self, comment_id: str) -> "ThreadState":
        """Remove a comment and everything below it."""
        entry = self.entries.get(comment_id)
        if entry is None:
            return self

        removed = {comment_id, *self._descendants(comment_id)}
        entries = {k: v for k, v in self.entries.items() if k not in removed}
        children = {k: v for k, v in self.children.items() if k not in removed}

        parent = entries.get(entry.parent_id) if entry.parent_id else None
        if parent is not None:
            children[parent.id] = tuple(
                c for c in children.get(parent.id, ()) if c != comment_id
            )
            entries[parent.id] = parent.model_copy(
                update={"reply_count": max(parent.reply_count - 1, 0)}
            )

        return self.model_copy(
            update={
                "entries": entries,
                "children": children,
                "roots": tuple(r for r in self.roots if r != comment_id),
            }
        )

    def with_subthread(self, parent_id: str, page: CommentsPagePayload) -> "ThreadState":
        """Replace what is known below a comment with a freshly loaded sub-thread."""
        parent = self.entries.get(parent_id)
        node = next((n for n in page.comments if n.id == parent_id), None)
        if parent is None or node is None:
            return self

        stale = set(self._descendants(parent_id))
        entries = {k: v for k, v in self.entries.items() if k not in stale}
        children = {k: v for k, v in self.children.items() if k not in stale}

        # Sub-thread depths are relative to the parent
        _flatten(node.replies, entries, children, depth_offset=parent.depth)
        children[parent_id] = tuple(reply.id for reply in node.replies)
        entries[parent_id] = ThreadEntry.from_payload(node, parent.depth)

        return self.model_copy(update={"entries": entries, "children": children})

    def tree(self) -> tuple[ThreadNode, ...]:
        """Project the snapshot into nested nodes in display order."""

        def project(comment_id: str, depth: int) -> ThreadNode:
            return ThreadNode(
                entry=self.entries[comment_id],
                depth=depth,
                replies=tuple(
                    project(child, depth + 1)
                    for child in self.children.get(comment_id, ())
                ),
            )

        return tuple(project(root, 0) for root in self.roots)
