"""In-memory content registry for testing."""

from typing import Optional

from fanworks.domain.model.content import ContentItem
from fanworks.domain.repository.content import ContentRegistry
from fanworks.domain.value import ContentId


class InMemoryContentRegistry(ContentRegistry):
    """In-memory implementation of ContentRegistry for testing."""

    def __init__(self) -> None:
        self._items: dict[ContentId, ContentItem] = {}

    async def exists(self, content_id: ContentId) -> bool:
        """Check whether a content item exists."""
        return content_id in self._items

    async def find_by_id(self, content_id: ContentId) -> Optional[ContentItem]:
        """Find a content item by ID."""
        return self._items.get(content_id)

    async def save(self, item: ContentItem) -> ContentItem:
        """Save a content item (create or update)."""
        self._items[item.id] = item
        return item

    async def adjust_comment_count(self, content_id: ContentId, delta: int) -> None:
        """Add delta to the cached comment count (minimum 0)."""
        item = self._items.get(content_id)
        if item:
            self._items[content_id] = item.model_copy(
                update={"comment_count": max(item.comment_count + delta, 0)}
            )
