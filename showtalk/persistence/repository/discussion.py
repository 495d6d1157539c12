"""PostgreSQL implementation of Discussion repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from showtalk.domain.model import Discussion
from showtalk.domain.repository import DiscussionRepository
from showtalk.domain.value import DiscussionId
from showtalk.persistence.mappers import discussion_to_dict, row_to_discussion
from showtalk.persistence.tables import discussions_table


class PostgresDiscussionRepository(DiscussionRepository):
    """PostgreSQL implementation of DiscussionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, discussion_id: DiscussionId) -> Optional[Discussion]:
        """Find a discussion by ID."""
        stmt = select(discussions_table).where(discussions_table.c.id == discussion_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_discussion(row._asdict()) if row else None

    async def save(self, discussion: Discussion) -> Discussion:
        """Save a discussion (create or update)."""
        values = discussion_to_dict(discussion)
        stmt = insert(discussions_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[discussions_table.c.id],
            set_={k: v for k, v in values.items() if k != "id"},
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return discussion
