"""Unit tests for GetCommentsUseCase."""

from uuid import uuid4

import pytest

from showtalk.application.usecase.comment import GetCommentsRequest, GetCommentsUseCase
from showtalk.domain.error import NotFoundError
from showtalk.domain.repository import CommentRepository, DiscussionRepository
from showtalk.domain.service import JWTService, ReactionService, VoteService
from showtalk.domain.value import SortMode, UserId, VoteValue
from tests.conftest import make_comment, make_discussion
from tests.di import SEED_REACTION_TYPES
from tests.harness import create_env_fixture

# Unit test fixture - in-memory repositories
unit_env = create_env_fixture()


async def seed_discussion(unit_env):
    discussion_repo = await unit_env.get(DiscussionRepository)
    return await discussion_repo.save(make_discussion())


async def seed(unit_env, *comments):
    comment_repo = await unit_env.get(CommentRepository)
    for comment in comments:
        await comment_repo.save(comment)


class TestGetCommentsUseCase:
    """Tests for GetCommentsUseCase."""

    @pytest.mark.asyncio
    async def test_pages_through_roots(self, unit_env):
        """45 roots with limit 20 should report more until the last page."""
        use_case = await unit_env.get(GetCommentsUseCase)
        discussion = await seed_discussion(unit_env)
        await seed(unit_env, *(make_comment(discussion.id, minutes=i) for i in range(45)))

        pages = [
            await use_case.execute(
                GetCommentsRequest(
                    discussion_id=str(discussion.id), limit=20, offset=offset
                )
            )
            for offset in (0, 20, 40)
        ]

        assert [len(p.comments) for p in pages] == [20, 20, 5]
        assert [p.pagination.has_more for p in pages] == [True, True, False]
        seen = [c.id for p in pages for c in p.comments]
        assert len(set(seen)) == 45
        assert pages[2].stats.total_comments == 45

    @pytest.mark.asyncio
    async def test_replies_nested_and_capped(self, unit_env):
        use_case = await unit_env.get(GetCommentsUseCase)
        discussion = await seed_discussion(unit_env)
        root = make_comment(discussion.id)
        reply = make_comment(discussion.id, root, minutes=1)
        nested = make_comment(discussion.id, reply, minutes=2)
        await seed(unit_env, root, reply, nested)

        response = await use_case.execute(
            GetCommentsRequest(discussion_id=str(discussion.id), max_depth=1)
        )

        (thread,) = response.comments
        assert thread.replies[0].id == str(reply.id)
        assert thread.replies[0].depth == 1
        assert thread.replies[0].replies == []
        assert thread.replies[0].has_more_replies is True
        assert response.stats.max_depth == 2
        assert response.stats.top_level_comments == 1

    @pytest.mark.asyncio
    async def test_flat_listing_without_tree(self, unit_env):
        use_case = await unit_env.get(GetCommentsUseCase)
        discussion = await seed_discussion(unit_env)
        root = make_comment(discussion.id)
        await seed(unit_env, root, make_comment(discussion.id, root))

        response = await use_case.execute(
            GetCommentsRequest(discussion_id=str(discussion.id), tree=False)
        )

        assert [c.id for c in response.comments] == [str(root.id)]
        assert response.comments[0].replies == []
        assert response.comments[0].reply_count == 1

    @pytest.mark.asyncio
    async def test_top_sort_uses_scores(self, unit_env):
        use_case = await unit_env.get(GetCommentsUseCase)
        vote_service = await unit_env.get(VoteService)
        discussion = await seed_discussion(unit_env)
        quiet = make_comment(discussion.id, minutes=5)
        popular = make_comment(discussion.id, minutes=0)
        await seed(unit_env, quiet, popular)
        await vote_service.vote(popular.id, UserId(uuid4()), VoteValue.UPVOTE)

        response = await use_case.execute(
            GetCommentsRequest(discussion_id=str(discussion.id), sort=SortMode.TOP)
        )

        assert [c.id for c in response.comments] == [str(popular.id), str(quiet.id)]
        assert response.comments[0].score == 1
        assert response.comments[0].upvotes == 1

    @pytest.mark.asyncio
    async def test_viewer_state_filled_from_token(self, unit_env):
        """An authenticated reader should see their own vote and reaction."""
        use_case = await unit_env.get(GetCommentsUseCase)
        vote_service = await unit_env.get(VoteService)
        reaction_service = await unit_env.get(ReactionService)
        jwt_service = await unit_env.get(JWTService)
        discussion = await seed_discussion(unit_env)
        comment = make_comment(discussion.id)
        await seed(unit_env, comment)

        viewer = UserId(uuid4())
        await vote_service.vote(comment.id, viewer, VoteValue.DOWNVOTE)
        await reaction_service.react(comment.id, viewer, SEED_REACTION_TYPES[2].id)
        token = jwt_service.create_token(str(viewer), "viewer.showtalk.tv")

        signed_in = await use_case.execute(
            GetCommentsRequest(discussion_id=str(discussion.id), auth_token=token)
        )
        anonymous = await use_case.execute(
            GetCommentsRequest(discussion_id=str(discussion.id))
        )

        assert signed_in.comments[0].user_vote == VoteValue.DOWNVOTE
        assert signed_in.comments[0].reactions[0].reacted is True
        assert anonymous.comments[0].user_vote is None
        assert anonymous.comments[0].reactions[0].reacted is False

    @pytest.mark.asyncio
    async def test_limit_is_capped(self, unit_env):
        use_case = await unit_env.get(GetCommentsUseCase)
        discussion = await seed_discussion(unit_env)

        response = await use_case.execute(
            GetCommentsRequest(discussion_id=str(discussion.id), limit=500)
        )

        assert response.pagination.limit == 100
        assert response.comments == []

    @pytest.mark.asyncio
    async def test_unknown_discussion_raises_error(self, unit_env):
        use_case = await unit_env.get(GetCommentsUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(GetCommentsRequest(discussion_id=str(uuid4())))
