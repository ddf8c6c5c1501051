"""PostgreSQL implementation of Like repository."""

from typing import Sequence, Set

from sqlalchemy import and_, delete, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from fanworks.domain.model import Like
from fanworks.domain.repository import LikeRepository
from fanworks.domain.value import CommentId, UserId
from fanworks.persistence.mappers import like_to_dict
from fanworks.persistence.tables import comment_likes_table


class PostgresLikeRepository(LikeRepository):
    """PostgreSQL implementation of LikeRepository.

    Relies on the unique (comment_id, user_id) constraint: inserts use
    ON CONFLICT DO NOTHING and report whether a row was written.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def add(self, like: Like) -> bool:
        """Insert a like unless it already exists."""
        stmt = (
            insert(comment_likes_table)
            .values(**like_to_dict(like))
            .on_conflict_do_nothing(index_elements=["comment_id", "user_id"])
            .returning(comment_likes_table.c.comment_id)
        )
        result = await self.session.execute(stmt)
        inserted = result.fetchone() is not None
        await self.session.flush()
        return inserted

    async def remove(self, comment_id: CommentId, user_id: UserId) -> bool:
        """Delete a user's like on a comment."""
        stmt = delete(comment_likes_table).where(
            and_(
                comment_likes_table.c.comment_id == comment_id,
                comment_likes_table.c.user_id == user_id,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return (result.rowcount or 0) > 0

    async def count_by_comment(self, comment_id: CommentId) -> int:
        """Count likes on a comment."""
        stmt = (
            select(func.count())
            .select_from(comment_likes_table)
            .where(comment_likes_table.c.comment_id == comment_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_liked_comment_ids(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> Set[CommentId]:
        """Find which of the given comments a user likes."""
        if not comment_ids:
            return set()
        stmt = select(comment_likes_table.c.comment_id).where(
            and_(
                comment_likes_table.c.user_id == user_id,
                comment_likes_table.c.comment_id.in_(list(comment_ids)),
            )
        )
        result = await self.session.execute(stmt)
        return {CommentId(row.comment_id) for row in result.fetchall()}

    async def delete_by_comments(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete all likes on the given comments."""
        if not comment_ids:
            return 0
        stmt = delete(comment_likes_table).where(
            comment_likes_table.c.comment_id.in_(list(comment_ids))
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0
