"""Domain model entities for Fanworks."""

from fanworks.domain.model.comment import MAX_DEPTH, Comment
from fanworks.domain.model.common import utcnow
from fanworks.domain.model.content import ContentItem
from fanworks.domain.model.edit_history import EditHistory
from fanworks.domain.model.flag import Flag
from fanworks.domain.model.like import Like
from fanworks.domain.model.user import User

__all__ = [
    "MAX_DEPTH",
    "Comment",
    "ContentItem",
    "EditHistory",
    "Flag",
    "Like",
    "User",
    "utcnow",
]
