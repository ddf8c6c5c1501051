"""Domain value objects for Fanworks comments.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum

from pydantic import field_validator

from fanworks.domain.value.common import RootValueObject, ValueObject
from fanworks.domain.value.identifiers import UserId

ANONYMOUS_DISPLAY_NAME = "Anonymous"


class UserRole(str, Enum):
    """Role of an authenticated user."""

    USER = "user"
    MODERATOR = "moderator"
    ADMIN = "admin"

    @property
    def can_moderate(self) -> bool:
        """Moderators and admins may remove other users' comments."""
        return self in (UserRole.MODERATOR, UserRole.ADMIN)


class FlagReason(str, Enum):
    """Reason given when flagging a comment."""

    SPAM = "spam"
    HARASSMENT = "harassment"
    INAPPROPRIATE = "inappropriate"
    OTHER = "other"


class ThreadSort(str, Enum):
    """Ordering of top-level comments in a thread.

    Replies are always chronological regardless of this value.
    """

    NEWEST = "newest"
    OLDEST = "oldest"
    MOST_LIKED = "most_liked"


class CommentCounter(str, Enum):
    """Denormalized counters stored on a comment row."""

    LIKES = "like_count"
    FLAGS = "flag_count"


class Handle(RootValueObject[str]):
    """Public handle of a registered user."""

    @field_validator("root")
    @classmethod
    def validate_handle_format(cls, v: str) -> str:
        """Validate handle is not empty and within length limits."""
        if len(v) < 1 or len(v) > 50:
            raise ValueError("Handle must be 1-50 characters")
        return v


class Identity(ValueObject):
    """Requester identity resolved from an auth token.

    Anonymous requests have no Identity at all.
    """

    user_id: UserId
    handle: Handle
    role: UserRole = UserRole.USER
