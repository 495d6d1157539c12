"""Comment tree construction, ordering and pagination.

Comments are held in an arena (flat records keyed by ID) with a side index
of parent ID -> child IDs. The nested tree handed to callers is a read-time
projection of immutable CommentTreeNode objects built from that index, so
no caller ever shares a mutable node with another.
"""

import math
from collections import defaultdict
from typing import Iterable, Mapping, Optional, Sequence

import logfire

from showtalk.domain.model.comment import Comment
from showtalk.domain.model.comment_tree import CommentPage, CommentStats, CommentTreeNode
from showtalk.domain.model.reaction import ReactionSummary
from showtalk.domain.model.vote import VoteTally
from showtalk.domain.value import CommentId, SortMode, VoteValue

DEFAULT_ENGAGEMENT_WEIGHT = 0.5


def build_tree(
    comments: Iterable[Comment],
    max_depth: Optional[int] = None,
    *,
    tallies: Optional[Mapping[CommentId, VoteTally]] = None,
    user_votes: Optional[Mapping[CommentId, VoteValue]] = None,
    reactions: Optional[Mapping[CommentId, tuple[ReactionSummary, ...]]] = None,
) -> tuple[CommentTreeNode, ...]:
    """Build a nested reply tree from flat comment rows.

    Algorithm:
    1. Index comments by ID (first occurrence wins on duplicate IDs)
    2. Build adjacency map of parent_id -> [child_ids], oldest reply first
    3. Comments with no parent, or whose parent is not in the input, become
       roots of this fetch (a sub-thread or a page cut them off)
    4. Break any parent cycle by promoting its first unreached member
    5. Project each root recursively, stopping max_depth levels below it

    Args:
        comments: Flat comment rows, in the order roots should be listed
        max_depth: Levels of replies to project below each root
                   (None projects the whole tree)
        tallies: Vote tally per comment (missing means no votes)
        user_votes: The viewer's vote per comment
        reactions: Reaction summaries per comment

    Returns:
        Root nodes, each at relative depth 0

    Raises:
        ValueError: If max_depth is negative
    """
    if max_depth is not None and max_depth < 0:
        raise ValueError("max_depth must be >= 0")

    tallies = tallies or {}
    user_votes = user_votes or {}
    reactions = reactions or {}

    arena: dict[CommentId, Comment] = {}
    for comment in comments:
        arena.setdefault(comment.id, comment)

    adjacency: dict[CommentId, list[CommentId]] = defaultdict(list)
    root_ids: list[CommentId] = []
    for comment in arena.values():
        parent_id = comment.parent_id
        if parent_id is not None and parent_id in arena and parent_id != comment.id:
            adjacency[parent_id].append(comment.id)
        else:
            root_ids.append(comment.id)

    # Oldest reply first; sort is stable so equal timestamps keep input order
    for child_ids in adjacency.values():
        child_ids.sort(key=lambda cid: arena[cid].created_at)

    reached = _reachable(root_ids, adjacency)
    if len(reached) < len(arena):
        promoted = 0
        for comment_id, comment in arena.items():
            if comment_id in reached:
                continue
            adjacency[comment.parent_id].remove(comment_id)  # type: ignore[index]
            root_ids.append(comment_id)
            reached |= _reachable([comment_id], adjacency)
            promoted += 1
        logfire.warn("Broke parent cycle in comment tree", promoted=promoted)

    def build_subtree(comment_id: CommentId, level: int) -> CommentTreeNode:
        """Build a node and its replies down to the depth cap."""
        child_ids = adjacency.get(comment_id, [])
        capped = max_depth is not None and level >= max_depth
        replies = (
            ()
            if capped
            else tuple(build_subtree(child_id, level + 1) for child_id in child_ids)
        )
        return CommentTreeNode(
            comment=arena[comment_id],
            depth=level,
            replies=replies,
            reply_count=len(child_ids),
            has_more_replies=capped and bool(child_ids),
            tally=tallies.get(comment_id, VoteTally()),
            user_vote=user_votes.get(comment_id),
            reactions=reactions.get(comment_id, ()),
        )

    return tuple(build_subtree(root_id, 0) for root_id in root_ids)


def _reachable(
    start: Iterable[CommentId], adjacency: Mapping[CommentId, list[CommentId]]
) -> set[CommentId]:
    """Collect every ID reachable from start through the adjacency map."""
    seen: set[CommentId] = set()
    stack = list(start)
    while stack:
        comment_id = stack.pop()
        if comment_id in seen:
            continue
        seen.add(comment_id)
        stack.extend(adjacency.get(comment_id, ()))
    return seen


def best_key(
    tally: VoteTally, engagement_weight: float = DEFAULT_ENGAGEMENT_WEIGHT
) -> float:
    """Ranking value for the "best" sort.

    score + engagement_weight * log2(1 + total_votes)

    Strictly increasing in score for a fixed number of votes, and in the
    number of votes for a fixed score. With a weight below 1 a single
    downvote (-1 + w) stays under an untouched comment (0).
    """
    return tally.score + engagement_weight * math.log2(1 + tally.total)


def sort_roots(
    roots: Sequence[CommentTreeNode],
    mode: SortMode | str,
    *,
    engagement_weight: float = DEFAULT_ENGAGEMENT_WEIGHT,
) -> tuple[CommentTreeNode, ...]:
    """Order top-level nodes.

    - new: created_at DESC
    - top: score DESC, ties by created_at DESC
    - best: best_key DESC, then score DESC, then created_at DESC

    Sorting is stable: nodes with identical keys keep their input order.

    Args:
        roots: Root nodes (not modified)
        mode: Sort mode
        engagement_weight: Weight used by the best sort

    Returns:
        New tuple of the same nodes in sorted order

    Raises:
        ValueError: If mode is not a known sort mode
    """
    mode = SortMode(mode)

    if mode == SortMode.NEW:
        ordered = sorted(roots, key=lambda n: n.comment.created_at, reverse=True)
    elif mode == SortMode.TOP:
        ordered = sorted(
            roots, key=lambda n: (n.score, n.comment.created_at), reverse=True
        )
    else:
        ordered = sorted(
            roots,
            key=lambda n: (
                best_key(n.tally, engagement_weight),
                n.score,
                n.comment.created_at,
            ),
            reverse=True,
        )
    return tuple(ordered)


def paginate_roots(
    sorted_roots: Sequence[CommentTreeNode], offset: int, limit: int
) -> CommentPage:
    """Take a contiguous page of sorted roots.

    Pages are only consistent across calls while the sort keys stay the
    same; switching sort mode starts a new sequence.

    Raises:
        ValueError: If offset is negative or limit is below 1
    """
    if offset < 0:
        raise ValueError("offset must be >= 0")
    if limit < 1:
        raise ValueError("limit must be >= 1")

    return CommentPage(
        items=tuple(sorted_roots[offset : offset + limit]),
        offset=offset,
        limit=limit,
        has_more=offset + limit < len(sorted_roots),
    )


def compute_stats(comments: Iterable[Comment]) -> CommentStats:
    """Count comments for display (deleted comments included)."""
    total = 0
    top_level = 0
    max_depth = 0
    for comment in comments:
        total += 1
        if comment.parent_id is None:
            top_level += 1
        max_depth = max(max_depth, comment.depth)
    return CommentStats(
        total_comments=total, top_level_comments=top_level, max_depth=max_depth
    )
