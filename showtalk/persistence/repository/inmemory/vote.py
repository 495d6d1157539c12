"""In-memory vote repository for testing."""

from typing import Sequence

from showtalk.domain.model.vote import Vote
from showtalk.domain.repository.vote import VoteRepository
from showtalk.domain.value import CommentId, UserId


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self) -> None:
        self._votes: list[Vote] = []

    async def upsert(self, vote: Vote) -> Vote:
        """Store the vote, replacing the value of an existing one."""
        for i, existing in enumerate(self._votes):
            if existing.user_id == vote.user_id and existing.comment_id == vote.comment_id:
                updated = existing.model_copy(
                    update={"value": vote.value, "updated_at": vote.updated_at}
                )
                self._votes[i] = updated
                return updated

        self._votes.append(vote)
        return vote

    async def delete_by_user_and_comment(
        self, user_id: UserId, comment_id: CommentId
    ) -> bool:
        """Delete a user's vote on a comment."""
        for i, vote in enumerate(self._votes):
            if vote.user_id == user_id and vote.comment_id == comment_id:
                self._votes.pop(i)
                return True
        return False

    async def find_by_comments(self, comment_ids: Sequence[CommentId]) -> list[Vote]:
        """Find all votes on several comments (batch query)."""
        if not comment_ids:
            return []

        wanted = set(comment_ids)
        return [v for v in self._votes if v.comment_id in wanted]
