"""PostgreSQL implementation of EditHistory repository."""

from typing import List, Sequence

from sqlalchemy import asc, delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from fanworks.domain.model import EditHistory
from fanworks.domain.repository import EditHistoryRepository
from fanworks.domain.value import CommentId
from fanworks.persistence.mappers import edit_history_to_dict, row_to_edit_history
from fanworks.persistence.tables import comment_edit_history_table


class PostgresEditHistoryRepository(EditHistoryRepository):
    """PostgreSQL implementation of EditHistoryRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def append(self, entry: EditHistory) -> EditHistory:
        """Append one history row."""
        stmt = insert(comment_edit_history_table).values(**edit_history_to_dict(entry))
        await self.session.execute(stmt)
        await self.session.flush()
        return entry

    async def find_by_comment(self, comment_id: CommentId) -> List[EditHistory]:
        """Find the edit history of a comment, oldest edit first."""
        stmt = (
            select(comment_edit_history_table)
            .where(comment_edit_history_table.c.comment_id == comment_id)
            .order_by(
                asc(comment_edit_history_table.c.edited_at),
                asc(comment_edit_history_table.c.id),
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_edit_history(row._asdict()) for row in result.fetchall()]

    async def delete_by_comments(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete history rows of the given comments."""
        if not comment_ids:
            return 0
        stmt = delete(comment_edit_history_table).where(
            comment_edit_history_table.c.comment_id.in_(list(comment_ids))
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0
