"""PostgreSQL implementation of Reaction repository."""

from typing import List, Optional, Sequence

from sqlalchemy import and_, delete, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from showtalk.domain.model import Reaction, ReactionType
from showtalk.domain.model.reaction import DEFAULT_CATEGORY
from showtalk.domain.repository import ReactionRepository
from showtalk.domain.value import CommentId, ReactionTypeId, UserId
from showtalk.persistence.mappers import (
    REACTION_TYPE_LABELS,
    reaction_to_dict,
    row_to_reaction,
    row_to_reaction_type,
)
from showtalk.persistence.tables import comment_reactions_table, reaction_types_table


def _reaction_select():
    """Select reactions joined with their reaction type."""
    type_columns = [
        reaction_types_table.c[column].label(label)
        for label, column in REACTION_TYPE_LABELS.items()
    ]
    return select(comment_reactions_table, *type_columns).join(
        reaction_types_table,
        comment_reactions_table.c.reaction_type_id == reaction_types_table.c.id,
    )


class PostgresReactionRepository(ReactionRepository):
    """PostgreSQL implementation of ReactionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_types(self) -> List[ReactionType]:
        """List all reaction types ordered by category, then name."""
        stmt = select(reaction_types_table).order_by(
            func.coalesce(reaction_types_table.c.category, DEFAULT_CATEGORY),
            reaction_types_table.c.name,
        )
        result = await self.session.execute(stmt)
        return [row_to_reaction_type(row._asdict()) for row in result.fetchall()]

    async def find_type_by_id(
        self, reaction_type_id: ReactionTypeId
    ) -> Optional[ReactionType]:
        """Find a reaction type by ID."""
        stmt = select(reaction_types_table).where(
            reaction_types_table.c.id == reaction_type_id
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_reaction_type(row._asdict()) if row else None

    async def find_by_user_and_comment(
        self, user_id: UserId, comment_id: CommentId
    ) -> Optional[Reaction]:
        """Find a user's reaction on a comment."""
        stmt = _reaction_select().where(
            and_(
                comment_reactions_table.c.user_id == user_id,
                comment_reactions_table.c.comment_id == comment_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_reaction(row._asdict()) if row else None

    async def upsert(self, reaction: Reaction) -> Reaction:
        """Insert the reaction or switch its type on (comment_id, user_id) conflict."""
        stmt = insert(comment_reactions_table).values(**reaction_to_dict(reaction))
        stmt = stmt.on_conflict_do_update(
            constraint="uq_comment_reaction",
            set_={"reaction_type_id": stmt.excluded.reaction_type_id},
        )
        await self.session.execute(stmt)
        await self.session.flush()
        stored = await self.find_by_user_and_comment(
            reaction.user_id, reaction.comment_id
        )
        return stored or reaction

    async def delete_by_user_and_comment(
        self, user_id: UserId, comment_id: CommentId
    ) -> bool:
        """Delete a user's reaction on a comment."""
        stmt = delete(comment_reactions_table).where(
            and_(
                comment_reactions_table.c.user_id == user_id,
                comment_reactions_table.c.comment_id == comment_id,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def find_by_comments(
        self, comment_ids: Sequence[CommentId]
    ) -> List[Reaction]:
        """Find all reactions on several comments (batch query)."""
        if not comment_ids:
            return []

        stmt = _reaction_select().where(
            comment_reactions_table.c.comment_id.in_(comment_ids)
        )
        stmt = stmt.order_by(comment_reactions_table.c.created_at)
        result = await self.session.execute(stmt)
        return [row_to_reaction(row._asdict()) for row in result.fetchall()]
