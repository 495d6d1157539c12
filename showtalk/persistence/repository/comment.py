"""PostgreSQL implementation of Comment repository."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from showtalk.domain.model import Comment
from showtalk.domain.model.comment import PATH_SEPARATOR
from showtalk.domain.repository import CommentRepository
from showtalk.domain.value import CommentId, DiscussionId
from showtalk.persistence.mappers import comment_to_dict, row_to_comment
from showtalk.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_discussion(self, discussion_id: DiscussionId) -> List[Comment]:
        """Find all comments of a discussion in tree order."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.discussion_id == discussion_id)
            .order_by(comments_table.c.path)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_subtree(self, root: Comment) -> List[Comment]:
        """Find a comment and all of its descendants using a path prefix."""
        stmt = (
            select(comments_table)
            .where(
                or_(
                    comments_table.c.id == root.id,
                    comments_table.c.path.startswith(
                        f"{root.path}{PATH_SEPARATOR}", autoescape=True
                    ),
                )
            )
            .order_by(comments_table.c.path)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update)."""
        existing = await self.find_by_id(comment.id)
        comment_dict = comment_to_dict(comment)

        if existing:
            stmt = (
                comments_table.update()
                .where(comments_table.c.id == comment.id)
                .values(**comment_dict)
            )
        else:
            stmt = comments_table.insert().values(**comment_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return comment

    async def soft_delete(self, comment_id: CommentId) -> Optional[Comment]:
        """Mark a comment as deleted, keeping the row for its replies."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(is_deleted=True, updated_at=datetime.now())
            .returning(comments_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()

        if row is None:
            return None

        await self.session.flush()
        return row_to_comment(row._asdict())
