"""Unit tests for ThreadStore and the optimistic command runner."""

import asyncio

import httpx
import pytest

from showtalk.client import CommentsAPIClient, CommentsAPIError, ThreadStore
from showtalk.client.optimistic import OptimisticCommand, run_optimistic
from showtalk.domain.value import VoteValue
from tests.conftest import make_comment_payload

TEA = {"id": "rt-tea", "name": "tea", "emoji": "☕", "category": "emotional"}


class FakeCommentsServer:
    """Serves canned JSON per (method, path) and records requests."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], dict] = {}
        self.failing: dict[tuple[str, str], int] = {}
        self.unreachable: set[tuple[str, str]] = set()
        self.delays: dict[tuple[str, str], float] = {}
        self.requests: list[httpx.Request] = []

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key in self.delays:
            await asyncio.sleep(self.delays[key])
        if key in self.unreachable:
            raise httpx.ConnectError("connection refused", request=request)
        if key in self.failing:
            return httpx.Response(self.failing[key], json={"detail": "nope"})
        return httpx.Response(200, json=self.routes.get(key, {}))


FIRST_PAGE = {
    "comments": [
        make_comment_payload(
            "a",
            reply_count=1,
            replies=[
                make_comment_payload(
                    "a1",
                    parent_id="a",
                    depth=1,
                    reply_count=1,
                    has_more_replies=True,
                    reactions=[{"reaction_type": TEA, "count": 1}],
                )
            ],
        ),
        make_comment_payload("b", score=1, upvotes=1),
    ],
    "stats": {"total_comments": 4, "top_level_comments": 3, "max_depth": 2},
    "pagination": {"limit": 2, "offset": 0, "has_more": True},
}

COMMENTS_PATH = "/discussions/d-1/comments"


@pytest.fixture
def server() -> FakeCommentsServer:
    server = FakeCommentsServer()
    server.routes[("GET", COMMENTS_PATH)] = FIRST_PAGE
    return server


@pytest.fixture
def store(server) -> ThreadStore:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(server))
    api = CommentsAPIClient("http://api.test", token="token-1", http_client=http_client)
    return ThreadStore(
        api,
        "d-1",
        author_id="viewer-1",
        author_handle="viewer.showtalk.tv",
        page_size=2,
    )


class TestCommentsAPIClient:
    """Tests for CommentsAPIClient error handling."""

    @pytest.mark.asyncio
    async def test_non_success_status_raises_error(self, store, server):
        server.failing[("POST", "/discussions/comments/vote")] = 409

        with pytest.raises(CommentsAPIError) as exc_info:
            await store.api.vote("a", VoteValue.UPVOTE)

        assert exc_info.value.status_code == 409

    @pytest.mark.asyncio
    async def test_transport_failure_raises_error(self, store, server):
        server.unreachable.add(("DELETE", "/discussions/comments/a"))

        with pytest.raises(CommentsAPIError) as exc_info:
            await store.api.delete_comment("a")

        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_sends_bearer_token_and_query(self, store, server):
        await store.api.fetch_comments("d-1", limit=2, offset=4)

        request = server.requests[-1]
        assert request.headers["Authorization"] == "Bearer token-1"
        assert request.url.params["offset"] == "4"
        assert request.url.params["sort"] == "new"
        assert "max_depth" not in request.url.params

    @pytest.mark.asyncio
    async def test_empty_page_payload_parses(self, store, server):
        server.routes[("GET", COMMENTS_PATH)] = {}

        page = await store.api.fetch_comments("d-1")

        assert page.comments == []
        assert page.pagination.has_more is False


class TestRunOptimistic:
    """Tests for run_optimistic."""

    @pytest.mark.asyncio
    async def test_failure_runs_undo_without_raising(self, store):
        await store.load()
        snapshot = store.state

        async def send():
            raise CommentsAPIError("boom", status_code=500)

        accepted = await run_optimistic(
            store,
            lambda state: state.with_deleted("a"),
            send,
            undo=lambda state: state.with_restored(
                snapshot.get("a"), "is_deleted", "content"
            ),
        )

        assert accepted is False
        assert store.state == snapshot

    @pytest.mark.asyncio
    async def test_undo_keeps_changes_made_while_in_flight(self, store):
        await store.load()

        async def send():
            # Another command settles while this request is pending
            store.state = store.state.with_deleted("b")
            raise CommentsAPIError("boom", status_code=500)

        await run_optimistic(
            store,
            lambda state: state.with_vote("a", VoteValue.UPVOTE),
            send,
            undo=lambda state: state.with_vote("a", None),
        )

        assert store.state.get("a").user_vote is None
        assert store.state.get("b").is_deleted is True

    @pytest.mark.asyncio
    async def test_success_applies_reconcile(self, store):
        await store.load()

        async def send():
            return 5

        command = OptimisticCommand(
            "bump",
            apply=lambda state: state.with_vote("b", VoteValue.UPVOTE),
            send=send,
            reconcile=lambda state, score: state.with_tally("b", score, score, 0),
        )

        assert await command.run(store) is True
        assert store.state.get("b").score == 5
        assert store.state.get("b").user_vote == VoteValue.UPVOTE


class TestLoading:
    """Tests for load, load_more and continue_thread."""

    @pytest.mark.asyncio
    async def test_load_builds_snapshot(self, store):
        assert await store.load() is True

        assert store.state.roots == ("a", "b")
        assert store.state.has_more is True
        assert store.state.get("a1").has_more_replies is True

    @pytest.mark.asyncio
    async def test_failed_load_keeps_previous_state(self, store, server):
        server.failing[("GET", COMMENTS_PATH)] = 503
        before = store.state

        assert await store.load() is False
        assert store.state is before

    @pytest.mark.asyncio
    async def test_load_more_requests_next_offset(self, store, server):
        await store.load()
        server.routes[("GET", COMMENTS_PATH)] = {
            "comments": [make_comment_payload("c")],
            "pagination": {"limit": 2, "offset": 2, "has_more": False},
        }

        assert await store.load_more() is True

        assert server.requests[-1].url.params["offset"] == "2"
        assert store.state.roots == ("a", "b", "c")
        assert await store.load_more() is False

    @pytest.mark.asyncio
    async def test_continue_thread_fills_replies(self, store, server):
        await store.load()
        server.routes[("GET", COMMENTS_PATH)] = {
            "comments": [
                make_comment_payload(
                    "a1",
                    parent_id="a",
                    replies=[make_comment_payload("a2", parent_id="a1", depth=1)],
                )
            ],
            "stats": None,
            "pagination": {"limit": 50, "offset": 0, "has_more": False},
        }

        assert await store.continue_thread("a1") is True

        assert server.requests[-1].url.params["parent_id"] == "a1"
        assert store.state.children["a1"] == ("a2",)
        assert store.state.get("a2").depth == 2


class TestMutations:
    """Tests for votes, reactions, replies and deletion."""

    @pytest.mark.asyncio
    async def test_vote_reconciles_with_server_tally(self, store, server):
        await store.load()
        server.routes[("POST", "/discussions/comments/vote")] = {
            "vote": {"value": "UPVOTE"},
            "score": 4,
            "upvotes": 4,
            "downvotes": 0,
        }

        assert await store.vote("b", VoteValue.UPVOTE) is True

        entry = store.state.get("b")
        assert (entry.score, entry.user_vote) == (4, VoteValue.UPVOTE)

    @pytest.mark.asyncio
    async def test_failed_vote_rolls_back(self, store, server):
        await store.load()
        server.failing[("POST", "/discussions/comments/vote")] = 500
        before = store.state

        assert await store.vote("b", VoteValue.DOWNVOTE) is False
        assert store.state == before

    @pytest.mark.asyncio
    async def test_clearing_vote_calls_delete(self, store, server):
        await store.load()

        assert await store.vote("b", None) is True

        assert server.requests[-1].method == "DELETE"
        assert server.requests[-1].url.params["comment_id"] == "b"

    @pytest.mark.asyncio
    async def test_submit_reply_replaces_temporary_entry(self, store, server):
        await store.load()
        server.routes[("POST", "/discussions/comments")] = {
            "comment": make_comment_payload("c-new", parent_id="a", depth=1)
        }

        assert await store.submit_reply("Same here", parent_id="a") is True

        assert store.state.children["a"] == ("c-new", "a1")
        assert not any(cid.startswith("temp-") for cid in store.state.entries)
        assert store.state.get("a").reply_count == 2
        assert store.state.get("c-new").pending is False

    @pytest.mark.asyncio
    async def test_failed_reply_is_removed(self, store, server):
        await store.load()
        server.failing[("POST", "/discussions/comments")] = 400
        before = store.state

        assert await store.submit_reply("Same here", parent_id="a") is False

        assert store.state == before
        assert store.state.children["a"] == ("a1",)

    @pytest.mark.asyncio
    async def test_react_shows_known_type_immediately(self, store, server):
        await store.load()
        server.routes[("POST", "/discussions/comments/reaction")] = {
            "reaction": {"id": "r-1", "comment_id": "a1", "reaction_type": TEA}
        }

        assert await store.react("a1", "rt-tea") is True

        (tea,) = store.state.get("a1").reactions
        assert (tea.count, tea.reacted) == (2, True)

    @pytest.mark.asyncio
    async def test_failed_remove_reaction_rolls_back(self, store, server):
        await store.load()
        server.routes[("POST", "/discussions/comments/reaction")] = {
            "reaction": {"id": "r-1", "comment_id": "b", "reaction_type": TEA}
        }
        await store.react("b", "rt-tea")
        server.failing[("DELETE", "/discussions/comments/reaction")] = 500
        before = store.state

        assert await store.remove_reaction("b") is False
        assert store.state == before
        assert store.state.get("b").viewer_reaction.reaction_type.name == "tea"

    @pytest.mark.asyncio
    async def test_delete_shows_placeholder(self, store):
        await store.load()

        assert await store.delete("a") is True

        assert store.state.get("a").content == "[comment deleted]"
        assert store.state.children["a"] == ("a1",)

    @pytest.mark.asyncio
    async def test_deleted_comment_refuses_votes_locally(self, store, server):
        await store.load()
        await store.delete("a")
        sent = len(server.requests)

        assert await store.vote("a", VoteValue.UPVOTE) is False
        assert await store.react("a", "rt-tea") is False
        assert await store.submit_reply("Hello", parent_id="a") is False
        assert len(server.requests) == sent

    @pytest.mark.asyncio
    async def test_unreachable_server_rolls_back_delete(self, store, server):
        await store.load()
        server.unreachable.add(("DELETE", "/discussions/comments/a"))

        assert await store.delete("a") is False
        assert store.state.get("a").is_deleted is False

    @pytest.mark.asyncio
    async def test_failed_vote_keeps_reply_confirmed_meanwhile(self, store, server):
        await store.load()
        server.failing[("POST", "/discussions/comments/vote")] = 500
        server.delays[("POST", "/discussions/comments/vote")] = 0.2
        server.routes[("POST", "/discussions/comments")] = {
            "comment": make_comment_payload("c-new", parent_id="a", depth=1)
        }

        voted, replied = await asyncio.gather(
            store.vote("b", VoteValue.UPVOTE),
            store.submit_reply("Same here", parent_id="a"),
        )

        assert (voted, replied) == (False, True)
        assert store.state.get("c-new") is not None
        assert store.state.children["a"] == ("c-new", "a1")
        entry = store.state.get("b")
        assert (entry.user_vote, entry.score, entry.upvotes) == (None, 1, 1)

    @pytest.mark.asyncio
    async def test_failed_reply_keeps_vote_confirmed_meanwhile(self, store, server):
        await store.load()
        server.failing[("POST", "/discussions/comments")] = 500
        server.delays[("POST", "/discussions/comments")] = 0.2
        server.routes[("POST", "/discussions/comments/vote")] = {
            "vote": {"value": "DOWNVOTE"},
            "score": 0,
            "upvotes": 1,
            "downvotes": 1,
        }

        replied, voted = await asyncio.gather(
            store.submit_reply("Same here", parent_id="a"),
            store.vote("b", VoteValue.DOWNVOTE),
        )

        assert (replied, voted) == (False, True)
        assert store.state.children["a"] == ("a1",)
        assert store.state.get("a").reply_count == 1
        entry = store.state.get("b")
        assert (entry.user_vote, entry.downvotes) == (VoteValue.DOWNVOTE, 1)

    @pytest.mark.asyncio
    async def test_pending_reply_cannot_be_deleted(self, store, server):
        await store.load()
        server.delays[("POST", "/discussions/comments")] = 0.2
        server.routes[("POST", "/discussions/comments")] = {
            "comment": make_comment_payload("c-new", parent_id="a", depth=1)
        }
        reply = asyncio.create_task(store.submit_reply("Same here", parent_id="a"))
        await asyncio.sleep(0.05)
        (temp_id,) = [cid for cid in store.state.children["a"] if cid != "a1"]

        assert store.state.get(temp_id).pending is True
        assert await store.delete(temp_id) is False
        assert not any(r.method == "DELETE" for r in server.requests)

        assert await reply is True
        assert store.state.get("c-new").is_deleted is False


class TestViewState:
    """Tests for collapse toggles and the reply composer."""

    @pytest.mark.asyncio
    async def test_replies_start_collapsed_and_roots_expanded(self, store):
        await store.load()

        assert store.is_collapsed("a") is False
        assert store.is_collapsed("a1") is True
        assert store.toggle_collapsed("a1") is False
        assert store.toggle_collapsed("a") is True

    @pytest.mark.asyncio
    async def test_cancel_discards_draft(self, store):
        await store.load()

        store.open_composer("a")
        store.update_draft("Half a thought")
        store.cancel_composer()

        assert store.composer is None
        assert store.open_composer("a").draft == ""

    @pytest.mark.asyncio
    async def test_submitting_composer_closes_it(self, store, server):
        await store.load()
        server.routes[("POST", "/discussions/comments")] = {
            "comment": make_comment_payload("c-new", parent_id="b", depth=1)
        }
        store.open_composer("b")
        store.update_draft("Couldn't agree more")

        assert await store.submit_composer() is True

        assert store.composer is None
        assert store.state.children["b"] == ("c-new",)
