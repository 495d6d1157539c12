"""Unit tests for CommentService."""

from uuid import uuid4

import pytest

from showtalk.domain.error import (
    BusinessRuleViolationError,
    ContentDeletedException,
    NotAuthorizedError,
    NotFoundError,
)
from showtalk.domain.repository import CommentRepository
from showtalk.domain.service import CommentService
from showtalk.domain.value import CommentId, DiscussionId, UserId
from showtalk.domain.value.types import Handle
from tests.conftest import make_comment
from tests.harness import create_env_fixture

# Unit test fixture - in-memory repositories
unit_env = create_env_fixture()

HANDLE = Handle(root="viewer.showtalk.tv")


class TestCreateComment:
    """Tests for create_comment."""

    @pytest.mark.asyncio
    async def test_top_level_comment_has_depth_zero(self, unit_env):
        """A comment without parent should be a root with its own ID as path."""
        comment_service = await unit_env.get(CommentService)
        discussion_id = DiscussionId(uuid4())

        comment = await comment_service.create_comment(
            discussion_id=discussion_id,
            author_id=UserId(uuid4()),
            author_handle=HANDLE,
            content="  What a finale  ",
        )

        assert comment.depth == 0
        assert comment.parent_id is None
        assert comment.path == str(comment.id)
        assert comment.content == "What a finale"

    @pytest.mark.asyncio
    async def test_reply_extends_parent_path(self, unit_env):
        """A reply should sit one level below its parent."""
        comment_service = await unit_env.get(CommentService)
        discussion_id = DiscussionId(uuid4())
        author_id = UserId(uuid4())

        root = await comment_service.create_comment(
            discussion_id, author_id, HANDLE, "Root"
        )
        reply = await comment_service.create_comment(
            discussion_id, author_id, HANDLE, "Reply", parent_id=root.id
        )
        nested = await comment_service.create_comment(
            discussion_id, author_id, HANDLE, "Nested", parent_id=reply.id
        )

        assert reply.depth == 1
        assert reply.path == f"{root.id}/{reply.id}"
        assert nested.depth == 2
        assert nested.ancestor_ids == [root.id, reply.id]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "   ", "x" * 10001])
    async def test_invalid_content_raises_error(self, unit_env, content):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(ValueError):
            await comment_service.create_comment(
                DiscussionId(uuid4()), UserId(uuid4()), HANDLE, content
            )

    @pytest.mark.asyncio
    async def test_missing_parent_raises_error(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError):
            await comment_service.create_comment(
                DiscussionId(uuid4()),
                UserId(uuid4()),
                HANDLE,
                "Reply",
                parent_id=CommentId(uuid4()),
            )

    @pytest.mark.asyncio
    async def test_parent_from_other_discussion_raises_error(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        parent = await comment_repo.save(make_comment(DiscussionId(uuid4())))

        with pytest.raises(BusinessRuleViolationError):
            await comment_service.create_comment(
                DiscussionId(uuid4()), UserId(uuid4()), HANDLE, "Reply", parent.id
            )

    @pytest.mark.asyncio
    async def test_reply_to_deleted_parent_raises_error(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        discussion_id = DiscussionId(uuid4())
        parent = await comment_repo.save(make_comment(discussion_id, is_deleted=True))

        with pytest.raises(ContentDeletedException):
            await comment_service.create_comment(
                discussion_id, UserId(uuid4()), HANDLE, "Reply", parent.id
            )

    @pytest.mark.asyncio
    async def test_nesting_beyond_limit_raises_error(self, unit_env):
        """Replies deeper than max_nesting_depth (10) should be rejected."""
        comment_service = await unit_env.get(CommentService)
        discussion_id = DiscussionId(uuid4())
        author_id = UserId(uuid4())

        parent = await comment_service.create_comment(
            discussion_id, author_id, HANDLE, "Level 0"
        )
        for level in range(1, 11):
            parent = await comment_service.create_comment(
                discussion_id, author_id, HANDLE, f"Level {level}", parent.id
            )
        assert parent.depth == 10

        with pytest.raises(BusinessRuleViolationError, match="too deep"):
            await comment_service.create_comment(
                discussion_id, author_id, HANDLE, "Level 11", parent.id
            )


class TestGetComments:
    """Tests for reading comments."""

    @pytest.mark.asyncio
    async def test_get_subtree_returns_branch_only(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        discussion_id = DiscussionId(uuid4())

        root = make_comment(discussion_id)
        branch = make_comment(discussion_id, root)
        leaf = make_comment(discussion_id, branch)
        sibling = make_comment(discussion_id, root)
        for comment in (root, branch, leaf, sibling):
            await comment_repo.save(comment)

        subtree = await comment_service.get_subtree(branch)

        assert {c.id for c in subtree} == {branch.id, leaf.id}

    @pytest.mark.asyncio
    async def test_get_comments_for_discussion_includes_deleted(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        discussion_id = DiscussionId(uuid4())
        await comment_repo.save(make_comment(discussion_id))
        await comment_repo.save(make_comment(discussion_id, is_deleted=True))
        await comment_repo.save(make_comment(DiscussionId(uuid4())))

        comments = await comment_service.get_comments_for_discussion(discussion_id)

        assert len(comments) == 2

    @pytest.mark.asyncio
    async def test_get_active_comment_rejects_deleted(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        deleted = await comment_repo.save(
            make_comment(DiscussionId(uuid4()), is_deleted=True)
        )

        with pytest.raises(ContentDeletedException):
            await comment_service.get_active_comment(deleted.id)
        with pytest.raises(NotFoundError):
            await comment_service.get_active_comment(CommentId(uuid4()))


class TestDeleteComment:
    """Tests for delete_comment."""

    @pytest.mark.asyncio
    async def test_author_soft_deletes_and_replies_survive(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        discussion_id = DiscussionId(uuid4())
        author_id = UserId(uuid4())
        root = await comment_repo.save(make_comment(discussion_id, author_id=author_id))
        reply = await comment_repo.save(make_comment(discussion_id, root))

        deleted = await comment_service.delete_comment(root.id, author_id)

        assert deleted.is_deleted is True
        assert deleted.content == root.content
        assert (await comment_repo.find_by_id(reply.id)).is_deleted is False

    @pytest.mark.asyncio
    async def test_non_author_cannot_delete(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.save(make_comment(DiscussionId(uuid4())))

        with pytest.raises(NotAuthorizedError):
            await comment_service.delete_comment(comment.id, UserId(uuid4()))

        assert (await comment_repo.find_by_id(comment.id)).is_deleted is False

    @pytest.mark.asyncio
    async def test_deleting_twice_is_a_no_op(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        author_id = UserId(uuid4())
        comment = await comment_repo.save(
            make_comment(DiscussionId(uuid4()), author_id=author_id)
        )

        first = await comment_service.delete_comment(comment.id, author_id)
        second = await comment_service.delete_comment(comment.id, author_id)

        assert second == first

    @pytest.mark.asyncio
    async def test_missing_comment_raises_error(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError):
            await comment_service.delete_comment(CommentId(uuid4()), UserId(uuid4()))
