"""Like entity.

A Like row exists while a user currently likes a comment. Toggling a like
off deletes the row.
"""

from datetime import datetime

from pydantic import Field

from fanworks.domain.model.common import DomainModel, utcnow
from fanworks.domain.value import CommentId, UserId


class Like(DomainModel):
    """Like entity.

    Business rules:
    - One like per user per comment (enforced by a unique constraint)
    - Only authenticated users can like
    """

    comment_id: CommentId
    user_id: UserId
    created_at: datetime = Field(default_factory=utcnow)
