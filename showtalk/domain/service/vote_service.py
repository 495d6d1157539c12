"""Vote domain service."""

from collections import defaultdict
from datetime import datetime
from uuid import uuid4

import logfire

from showtalk.domain.model.vote import Vote, VoteTally
from showtalk.domain.repository import VoteRepository
from showtalk.domain.value import CommentId, UserId, VoteId, VoteValue

from .base import Service
from .comment_service import CommentService


class VoteService(Service):
    """Domain service for vote operations."""

    def __init__(
        self,
        vote_repository: VoteRepository,
        comment_service: CommentService,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            comment_service: Comment domain service
        """
        self.vote_repository = vote_repository
        self.comment_service = comment_service

    async def vote(
        self, comment_id: CommentId, user_id: UserId, value: VoteValue
    ) -> tuple[Vote, VoteTally]:
        """Cast or change a vote on a comment.

        A user holds at most one vote per comment; voting again replaces the
        value, so repeating the same vote leaves the score unchanged.

        Args:
            comment_id: Comment ID
            user_id: User ID
            value: Vote direction

        Returns:
            The stored vote and the comment's fresh tally

        Raises:
            NotFoundError: If the comment doesn't exist
            ContentDeletedException: If the comment has been deleted
        """
        with logfire.span(
            "vote_service.vote",
            comment_id=str(comment_id),
            user_id=str(user_id),
            value=value.value,
        ):
            await self.comment_service.get_active_comment(comment_id)

            now = datetime.now()
            vote = Vote(
                id=VoteId(uuid4()),
                comment_id=comment_id,
                user_id=user_id,
                value=value,
                created_at=now,
                updated_at=now,
            )
            saved = await self.vote_repository.upsert(vote)

            tally = (await self.get_tallies([comment_id]))[comment_id]
            logfire.info(
                "Vote recorded",
                comment_id=str(comment_id),
                user_id=str(user_id),
                value=value.value,
                score=tally.score,
            )
            return saved, tally

    async def remove_vote(self, comment_id: CommentId, user_id: UserId) -> bool:
        """Remove a user's vote from a comment.

        Args:
            comment_id: Comment ID
            user_id: User ID

        Returns:
            True if vote was removed, False if no vote existed
        """
        with logfire.span(
            "vote_service.remove_vote",
            comment_id=str(comment_id),
            user_id=str(user_id),
        ):
            deleted = await self.vote_repository.delete_by_user_and_comment(
                user_id=user_id, comment_id=comment_id
            )
            if deleted:
                logfire.info(
                    "Vote removed from comment",
                    comment_id=str(comment_id),
                    user_id=str(user_id),
                )
            else:
                logfire.info(
                    "No vote to remove from comment",
                    comment_id=str(comment_id),
                    user_id=str(user_id),
                )
            return deleted

    async def get_tallies(
        self, comment_ids: list[CommentId]
    ) -> dict[CommentId, VoteTally]:
        """Count votes on several comments.

        Args:
            comment_ids: Comment IDs

        Returns:
            Tally per requested comment (zero tally when it has no votes)
        """
        if not comment_ids:
            return {}

        # Batch query to fetch all votes at once (avoid N+1)
        votes = await self.vote_repository.find_by_comments(comment_ids)

        by_comment: dict[CommentId, list[Vote]] = defaultdict(list)
        for vote in votes:
            by_comment[vote.comment_id].append(vote)

        return {cid: VoteTally.from_votes(by_comment[cid]) for cid in comment_ids}

    async def get_user_votes(
        self, user_id: UserId, comment_ids: list[CommentId]
    ) -> dict[CommentId, VoteValue]:
        """Look up a user's votes on several comments.

        Args:
            user_id: User ID
            comment_ids: Comment IDs to check

        Returns:
            Vote value per comment the user voted on
        """
        if not comment_ids:
            return {}

        votes = await self.vote_repository.find_by_comments(comment_ids)
        return {vote.comment_id: vote.value for vote in votes if vote.user_id == user_id}
