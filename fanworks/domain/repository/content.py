"""Content registry interface."""

from abc import ABC, abstractmethod
from typing import Optional

from fanworks.domain.model.content import ContentItem
from fanworks.domain.value import ContentId


class ContentRegistry(ABC):
    """Access to the content items comments attach to.

    The comment system only checks existence and reports comment count
    deltas; content itself is managed elsewhere.
    """

    @abstractmethod
    async def exists(self, content_id: ContentId) -> bool:
        """Check whether a content item exists."""
        pass

    @abstractmethod
    async def find_by_id(self, content_id: ContentId) -> Optional[ContentItem]:
        """Find a content item by ID."""
        pass

    @abstractmethod
    async def save(self, item: ContentItem) -> ContentItem:
        """Save a content item (create or update)."""
        pass

    @abstractmethod
    async def adjust_comment_count(self, content_id: ContentId, delta: int) -> None:
        """Atomically add delta to the cached comment count (minimum 0).

        Args:
            content_id: The content item
            delta: Change in number of comments
        """
        pass
