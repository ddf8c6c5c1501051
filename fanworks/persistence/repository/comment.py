"""PostgreSQL implementation of Comment repository."""

from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy import and_, asc, desc, func, or_, select, true, update
from sqlalchemy.ext.asyncio import AsyncSession

from fanworks.domain.model import Comment, utcnow
from fanworks.domain.repository import CommentRepository
from fanworks.domain.value import CommentCounter, CommentId, ContentId, ThreadSort, UserId
from fanworks.persistence.mappers import comment_to_dict, row_to_comment
from fanworks.persistence.tables import comments_table

_child = comments_table.alias("child")
_grandchild = comments_table.alias("grandchild")


def _has_active_descendant():
    """EXISTS clause: the outer comment has an active reply at any depth.

    Threads are at most three levels deep, so checking children and
    grandchildren covers every descendant of a top-level comment.
    """
    active_child = (
        select(_child.c.id)
        .where(_child.c.parent_id == comments_table.c.id)
        .where(_child.c.is_active.is_(True))
        .exists()
    )
    active_grandchild = (
        select(_grandchild.c.id)
        .select_from(_child.join(_grandchild, _grandchild.c.parent_id == _child.c.id))
        .where(_child.c.parent_id == comments_table.c.id)
        .where(_grandchild.c.is_active.is_(True))
        .exists()
    )
    return or_(active_child, active_grandchild)


def _listable_top_level(content_id: ContentId):
    return and_(
        comments_table.c.content_id == content_id,
        comments_table.c.parent_id.is_(None),
        or_(comments_table.c.is_active.is_(True), _has_active_descendant()),
    )


def _thread_order(sort: ThreadSort) -> list:
    if sort == ThreadSort.OLDEST:
        return [asc(comments_table.c.created_at), asc(comments_table.c.id)]
    if sort == ThreadSort.MOST_LIKED:
        return [
            desc(comments_table.c.like_count),
            asc(comments_table.c.created_at),
            asc(comments_table.c.id),
        ]
    return [desc(comments_table.c.created_at), asc(comments_table.c.id)]


def _review_filters(
    needs_review_only: bool, include_inactive: bool, search: Optional[str]
) -> list:
    filters = [true()]
    if needs_review_only:
        filters.append(comments_table.c.needs_review.is_(True))
    if not include_inactive:
        filters.append(comments_table.c.is_active.is_(True))
    if search:
        filters.append(comments_table.c.text.icontains(search, autoescape=True))
    return filters


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

    async def find_by_id_for_update(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID, locking the row (SELECT ... FOR UPDATE)."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.id == comment_id)
            .with_for_update()
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def save(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        stmt = comments_table.insert().values(**comment_to_dict(comment))
        await self.session.execute(stmt)
        await self.session.flush()
        return comment

    async def find_top_level(
        self,
        content_id: ContentId,
        sort: ThreadSort,
        limit: int,
        offset: int,
    ) -> List[Comment]:
        """Find one page of listable top-level comments."""
        stmt = (
            select(comments_table)
            .where(_listable_top_level(content_id))
            .order_by(*_thread_order(sort))
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def count_top_level(self, content_id: ContentId) -> int:
        """Count listable top-level comments."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(_listable_top_level(content_id))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_by_parents(self, parent_ids: Sequence[CommentId]) -> List[Comment]:
        """Find direct replies of several comments in one query."""
        if not parent_ids:
            return []
        stmt = (
            select(comments_table)
            .where(comments_table.c.parent_id.in_(list(parent_ids)))
            .order_by(asc(comments_table.c.created_at), asc(comments_table.c.id))
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_children(
        self,
        parent_id: CommentId,
        limit: int,
        offset: int,
        include_deleted: bool = False,
    ) -> List[Comment]:
        """Find one page of direct replies, oldest first."""
        stmt = select(comments_table).where(comments_table.c.parent_id == parent_id)

        if not include_deleted:
            stmt = stmt.where(comments_table.c.is_active.is_(True))

        stmt = (
            stmt.order_by(asc(comments_table.c.created_at), asc(comments_table.c.id))
            .limit(limit)
            .offset(offset)
        )

        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def count_children(
        self, parent_id: CommentId, include_deleted: bool = False
    ) -> int:
        """Count direct replies to a comment."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.parent_id == parent_id)
        )
        if not include_deleted:
            stmt = stmt.where(comments_table.c.is_active.is_(True))
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_by_content(self, content_id: ContentId) -> List[Comment]:
        """Find every comment of a content item."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.content_id == content_id)
            .order_by(asc(comments_table.c.depth), asc(comments_table.c.created_at))
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def update_text(
        self,
        comment_id: CommentId,
        text: str,
        edited_at: datetime,
    ) -> Optional[Comment]:
        """Overwrite the text of an active comment."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .where(comments_table.c.is_active.is_(True))
            .values(
                text=text,
                is_edited=True,
                last_edited_at=edited_at,
                updated_at=edited_at,
            )
            .returning(comments_table)
        )

        result = await self.session.execute(stmt)
        row = result.fetchone()

        if row is None:
            # Comment not found or deleted
            return None

        await self.session.flush()
        return row_to_comment(row._asdict())

    async def soft_delete(
        self,
        comment_id: CommentId,
        placeholder: str,
        deleted_at: datetime,
        deleted_by: Optional[UserId] = None,
        reason: Optional[str] = None,
    ) -> Optional[Comment]:
        """Deactivate an active comment in a single statement."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .where(comments_table.c.is_active.is_(True))
            .values(
                is_active=False,
                text=placeholder,
                deleted_at=deleted_at,
                deleted_by=deleted_by,
                deletion_reason=reason,
                updated_at=deleted_at,
            )
            .returning(comments_table)
        )

        result = await self.session.execute(stmt)
        row = result.fetchone()

        if row is None:
            return None

        await self.session.flush()
        return row_to_comment(row._asdict())

    async def increment_counter(
        self, comment_id: CommentId, counter: CommentCounter, delta: int
    ) -> Optional[int]:
        """Atomically add delta to a counter column (minimum 0)."""
        column = comments_table.c[counter.value]
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(
                {
                    counter.value: func.greatest(column + delta, 0),
                    "updated_at": utcnow(),
                }
            )
            .returning(column)
        )
        result = await self.session.execute(stmt)
        value = result.scalar_one_or_none()
        await self.session.flush()
        return value

    async def mark_needs_review(self, comment_id: CommentId) -> None:
        """Set the needs_review marker."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(needs_review=True)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def delete_many(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete comments (hard delete)."""
        if not comment_ids:
            return 0
        stmt = comments_table.delete().where(comments_table.c.id.in_(list(comment_ids)))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0

    async def delete_by_content(self, content_id: ContentId) -> int:
        """Delete every comment of a content item."""
        stmt = comments_table.delete().where(comments_table.c.content_id == content_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0

    async def find_for_review(
        self,
        needs_review_only: bool = False,
        include_inactive: bool = True,
        search: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Comment]:
        """Find comments for the moderation listing, newest first."""
        stmt = (
            select(comments_table)
            .where(*_review_filters(needs_review_only, include_inactive, search))
            .order_by(desc(comments_table.c.created_at), asc(comments_table.c.id))
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def count_for_review(
        self,
        needs_review_only: bool = False,
        include_inactive: bool = True,
        search: Optional[str] = None,
    ) -> int:
        """Count comments matching the moderation listing filters."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(*_review_filters(needs_review_only, include_inactive, search))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0
