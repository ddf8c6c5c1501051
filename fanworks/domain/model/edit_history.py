"""Edit history entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from fanworks.domain.model.common import DomainModel, utcnow
from fanworks.domain.value import CommentId, EditHistoryId, UserId


class EditHistory(DomainModel):
    """Text of a comment as it was before one edit.

    Append-only: one row per successful edit, never updated or deleted
    except by a hard delete of the comment itself.
    """

    id: EditHistoryId
    comment_id: CommentId
    previous_text: str
    edited_by: Optional[UserId] = None
    edited_at: datetime = Field(default_factory=utcnow)
