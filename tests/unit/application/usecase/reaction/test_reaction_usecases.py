"""Unit tests for the reaction use cases."""

from uuid import uuid4

import pytest

from showtalk.application.usecase.reaction import (
    ListReactionTypesUseCase,
    ReactCommentRequest,
    ReactCommentUseCase,
    RemoveReactionRequest,
    RemoveReactionUseCase,
)
from showtalk.domain.repository import CommentRepository
from showtalk.domain.service import ReactionService
from showtalk.domain.value import DiscussionId
from tests.conftest import make_comment
from tests.di import SEED_REACTION_TYPES
from tests.harness import create_env_fixture

# Unit test fixture - in-memory repositories
unit_env = create_env_fixture()


class TestListReactionTypesUseCase:
    """Tests for ListReactionTypesUseCase."""

    @pytest.mark.asyncio
    async def test_groups_by_category(self, unit_env):
        use_case = await unit_env.get(ListReactionTypesUseCase)

        response = await use_case.execute()

        grouped = {
            category: [item.name for item in items]
            for category, items in response.reaction_types.items()
        }
        assert grouped == {
            "emotional": ["tea"],
            "other": ["meh"],
            "positive": ["iconic", "slay"],
            "reality-tv": ["drama"],
        }
        assert list(grouped) == ["emotional", "other", "positive", "reality-tv"]


class TestReactCommentUseCase:
    """Tests for ReactCommentUseCase and RemoveReactionUseCase."""

    @pytest.mark.asyncio
    async def test_react_and_remove(self, unit_env):
        react = await unit_env.get(ReactCommentUseCase)
        remove = await unit_env.get(RemoveReactionUseCase)
        reaction_service = await unit_env.get(ReactionService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.save(make_comment(DiscussionId(uuid4())))
        user_id = str(uuid4())
        tea = SEED_REACTION_TYPES[2]

        response = await react.execute(
            ReactCommentRequest(
                comment_id=str(comment.id),
                reaction_type_id=str(tea.id),
                user_id=user_id,
            )
        )

        assert response.reaction.reaction_type.name == "tea"
        assert response.reaction.reaction_type.category == "emotional"
        assert response.reaction.user_id == user_id

        removed = await remove.execute(
            RemoveReactionRequest(comment_id=str(comment.id), user_id=user_id)
        )
        again = await remove.execute(
            RemoveReactionRequest(comment_id=str(comment.id), user_id=user_id)
        )

        assert removed.success is True
        assert again.success is True
        assert await reaction_service.get_reactions([comment.id]) == {}
