"""Unit tests for VoteService."""

from uuid import uuid4

import pytest

from showtalk.domain.error import ContentDeletedException, NotFoundError
from showtalk.domain.model import VoteTally
from showtalk.domain.repository import CommentRepository, VoteRepository
from showtalk.domain.service import VoteService
from showtalk.domain.value import CommentId, DiscussionId, UserId, VoteValue
from tests.conftest import make_comment
from tests.harness import create_env_fixture

# Unit test fixture - in-memory repositories
unit_env = create_env_fixture()


async def seed_comment(unit_env, **kwargs):
    comment_repo = await unit_env.get(CommentRepository)
    return await comment_repo.save(make_comment(DiscussionId(uuid4()), **kwargs))


class TestVote:
    """Tests for vote."""

    @pytest.mark.asyncio
    async def test_upvote_returns_fresh_tally(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        comment = await seed_comment(unit_env)
        user_id = UserId(uuid4())

        vote, tally = await vote_service.vote(comment.id, user_id, VoteValue.UPVOTE)

        assert vote.comment_id == comment.id
        assert vote.user_id == user_id
        assert tally == VoteTally(upvotes=1, downvotes=0)

    @pytest.mark.asyncio
    async def test_same_vote_twice_keeps_one_row(self, unit_env):
        """Voting the same value again should not change the score."""
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        comment = await seed_comment(unit_env)
        user_id = UserId(uuid4())

        await vote_service.vote(comment.id, user_id, VoteValue.UPVOTE)
        _, tally = await vote_service.vote(comment.id, user_id, VoteValue.UPVOTE)

        assert tally.score == 1
        assert len(await vote_repo.find_by_comments([comment.id])) == 1

    @pytest.mark.asyncio
    async def test_switching_vote_moves_score_by_two(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        comment = await seed_comment(unit_env)
        user_id = UserId(uuid4())
        await vote_service.vote(comment.id, UserId(uuid4()), VoteValue.UPVOTE)

        _, before = await vote_service.vote(comment.id, user_id, VoteValue.UPVOTE)
        _, after = await vote_service.vote(comment.id, user_id, VoteValue.DOWNVOTE)

        assert after.score == before.score - 2
        assert after.total == before.total

    @pytest.mark.asyncio
    async def test_vote_on_deleted_comment_raises_error(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        comment = await seed_comment(unit_env, is_deleted=True)

        with pytest.raises(ContentDeletedException):
            await vote_service.vote(comment.id, UserId(uuid4()), VoteValue.UPVOTE)

    @pytest.mark.asyncio
    async def test_vote_on_missing_comment_raises_error(self, unit_env):
        vote_service = await unit_env.get(VoteService)

        with pytest.raises(NotFoundError):
            await vote_service.vote(CommentId(uuid4()), UserId(uuid4()), VoteValue.UPVOTE)


class TestRemoveVote:
    """Tests for remove_vote."""

    @pytest.mark.asyncio
    async def test_remove_existing_vote(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        comment = await seed_comment(unit_env)
        user_id = UserId(uuid4())
        await vote_service.vote(comment.id, user_id, VoteValue.DOWNVOTE)

        assert await vote_service.remove_vote(comment.id, user_id) is True
        assert (await vote_service.get_tallies([comment.id]))[comment.id].total == 0

    @pytest.mark.asyncio
    async def test_remove_missing_vote_returns_false(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        comment = await seed_comment(unit_env)

        assert await vote_service.remove_vote(comment.id, UserId(uuid4())) is False


class TestBatchLookups:
    """Tests for get_tallies and get_user_votes."""

    @pytest.mark.asyncio
    async def test_tallies_include_unvoted_comments(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        voted = await seed_comment(unit_env)
        quiet = await seed_comment(unit_env)
        for value in (VoteValue.UPVOTE, VoteValue.UPVOTE, VoteValue.DOWNVOTE):
            await vote_service.vote(voted.id, UserId(uuid4()), value)

        tallies = await vote_service.get_tallies([voted.id, quiet.id])

        assert tallies[voted.id] == VoteTally(upvotes=2, downvotes=1)
        assert tallies[quiet.id] == VoteTally()

    @pytest.mark.asyncio
    async def test_user_votes_only_cover_that_user(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        first = await seed_comment(unit_env)
        second = await seed_comment(unit_env)
        viewer = UserId(uuid4())
        await vote_service.vote(first.id, viewer, VoteValue.DOWNVOTE)
        await vote_service.vote(second.id, UserId(uuid4()), VoteValue.UPVOTE)

        votes = await vote_service.get_user_votes(viewer, [first.id, second.id])

        assert votes == {first.id: VoteValue.DOWNVOTE}

    @pytest.mark.asyncio
    async def test_empty_lookups(self, unit_env):
        vote_service = await unit_env.get(VoteService)

        assert await vote_service.get_tallies([]) == {}
        assert await vote_service.get_user_votes(UserId(uuid4()), []) == {}
