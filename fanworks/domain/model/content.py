"""Content item as seen by the comment system."""

from datetime import datetime

from pydantic import Field

from fanworks.domain.model.common import DomainModel, utcnow
from fanworks.domain.value import ContentId


class ContentItem(DomainModel):
    """A piece of uploaded artwork or fiction that comments attach to.

    Owned by the content registry; comment_count is a cached aggregate the
    comment system keeps up to date.
    """

    id: ContentId
    title: str = Field(min_length=1, max_length=200)
    comment_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utcnow)
