"""Domain value objects for Fanworks."""

from fanworks.domain.value.identifiers import (
    CommentId,
    ContentId,
    EditHistoryId,
    FlagId,
    UserId,
)
from fanworks.domain.value.types import (
    ANONYMOUS_DISPLAY_NAME,
    CommentCounter,
    FlagReason,
    Handle,
    Identity,
    ThreadSort,
    UserRole,
)

__all__ = [
    # Identifiers
    "UserId",
    "ContentId",
    "CommentId",
    "FlagId",
    "EditHistoryId",
    # Types
    "ANONYMOUS_DISPLAY_NAME",
    "CommentCounter",
    "FlagReason",
    "Handle",
    "Identity",
    "ThreadSort",
    "UserRole",
]
