"""Flag entity."""

from datetime import datetime

from pydantic import Field

from fanworks.domain.model.common import DomainModel, utcnow
from fanworks.domain.value import CommentId, FlagId, FlagReason, UserId


class Flag(DomainModel):
    """A user's report of a comment.

    A user may flag a given comment at most once (unique on
    comment_id, user_id); later flags by the same user are ignored.
    """

    id: FlagId
    comment_id: CommentId
    user_id: UserId
    reason: FlagReason
    flagged_at: datetime = Field(default_factory=utcnow)
