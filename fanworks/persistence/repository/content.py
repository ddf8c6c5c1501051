"""PostgreSQL implementation of the content registry."""

from typing import Optional

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from fanworks.domain.model import ContentItem
from fanworks.domain.repository import ContentRegistry
from fanworks.domain.value import ContentId
from fanworks.persistence.mappers import content_to_dict, row_to_content
from fanworks.persistence.tables import content_table


class PostgresContentRegistry(ContentRegistry):
    """PostgreSQL implementation of ContentRegistry."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize registry with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def exists(self, content_id: ContentId) -> bool:
        """Check whether a content item exists."""
        stmt = select(content_table.c.id).where(content_table.c.id == content_id)
        result = await self.session.execute(stmt)
        return result.fetchone() is not None

    async def find_by_id(self, content_id: ContentId) -> Optional[ContentItem]:
        """Find a content item by ID."""
        stmt = select(content_table).where(content_table.c.id == content_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_content(row._asdict()) if row else None

    async def save(self, item: ContentItem) -> ContentItem:
        """Save a content item (create or update)."""
        existing = await self.exists(item.id)
        if existing:
            stmt = (
                update(content_table)
                .where(content_table.c.id == item.id)
                .values(title=item.title)
            )
        else:
            stmt = content_table.insert().values(**content_to_dict(item))
        await self.session.execute(stmt)
        await self.session.flush()
        return item

    async def adjust_comment_count(self, content_id: ContentId, delta: int) -> None:
        """Atomically add delta to the cached comment count (minimum 0)."""
        stmt = (
            update(content_table)
            .where(content_table.c.id == content_id)
            .values(
                comment_count=func.greatest(content_table.c.comment_count + delta, 0)
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()
