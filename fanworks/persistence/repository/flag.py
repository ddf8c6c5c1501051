"""PostgreSQL implementation of Flag repository."""

from typing import Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from fanworks.domain.model import Flag
from fanworks.domain.repository import FlagRepository
from fanworks.domain.value import CommentId
from fanworks.persistence.mappers import flag_to_dict
from fanworks.persistence.tables import comment_flags_table


class PostgresFlagRepository(FlagRepository):
    """PostgreSQL implementation of FlagRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def add(self, flag: Flag) -> bool:
        """Insert a flag unless the user already flagged the comment."""
        stmt = (
            insert(comment_flags_table)
            .values(**flag_to_dict(flag))
            .on_conflict_do_nothing(index_elements=["comment_id", "user_id"])
            .returning(comment_flags_table.c.id)
        )
        result = await self.session.execute(stmt)
        inserted = result.fetchone() is not None
        await self.session.flush()
        return inserted

    async def count_by_comment(self, comment_id: CommentId) -> int:
        """Count flags on a comment."""
        stmt = (
            select(func.count())
            .select_from(comment_flags_table)
            .where(comment_flags_table.c.comment_id == comment_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def delete_by_comments(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete all flags on the given comments."""
        if not comment_ids:
            return 0
        stmt = delete(comment_flags_table).where(
            comment_flags_table.c.comment_id.in_(list(comment_ids))
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0
