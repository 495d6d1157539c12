"""PostgreSQL implementation of Vote repository."""

from typing import List, Sequence

from sqlalchemy import and_, delete, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from showtalk.domain.model import Vote
from showtalk.domain.repository import VoteRepository
from showtalk.domain.value import CommentId, UserId
from showtalk.persistence.mappers import row_to_vote, vote_to_dict
from showtalk.persistence.tables import comment_votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def upsert(self, vote: Vote) -> Vote:
        """Insert the vote or update the value on (comment_id, user_id) conflict."""
        vote_dict = vote_to_dict(vote)
        stmt = insert(comment_votes_table).values(**vote_dict)
        stmt = stmt.on_conflict_do_update(
            constraint="uq_comment_vote",
            set_={
                "value": stmt.excluded.value,
                "updated_at": stmt.excluded.updated_at,
            },
        ).returning(comment_votes_table)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_vote(row._asdict()) if row else vote

    async def delete_by_user_and_comment(
        self, user_id: UserId, comment_id: CommentId
    ) -> bool:
        """Delete a user's vote on a comment."""
        stmt = delete(comment_votes_table).where(
            and_(
                comment_votes_table.c.user_id == user_id,
                comment_votes_table.c.comment_id == comment_id,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def find_by_comments(self, comment_ids: Sequence[CommentId]) -> List[Vote]:
        """Find all votes on several comments (batch query)."""
        if not comment_ids:
            return []

        stmt = select(comment_votes_table).where(
            comment_votes_table.c.comment_id.in_(comment_ids)
        )
        result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]
