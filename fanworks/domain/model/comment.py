"""Comment entity.

Comments form threads on content items, at most three levels deep
(depth 0, 1 and 2). The tree is stored flat: every row carries its
parent_id and depth, and threads are assembled by id lookups.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from fanworks.domain.model.common import DomainModel, utcnow
from fanworks.domain.value import CommentId, ContentId, UserId

MAX_DEPTH = 2


class Comment(DomainModel):
    """Comment entity.

    Represents a comment on a content item or a reply to another comment.

    Threading is managed through:
    - parent_id: Direct parent comment (None for top-level)
    - depth: Nesting level (0 for top-level, parent depth + 1 for replies)

    Visibility:
    - is_active is False after a soft delete; the text is then the
      deleted placeholder and the comment can no longer be liked,
      flagged or edited. Its replies are not affected.

    origin_ip and user_agent are write-once forensic fields and are never
    part of a public response.
    """

    id: CommentId
    content_id: ContentId
    parent_id: Optional[CommentId] = None
    depth: int = Field(default=0, ge=0, le=MAX_DEPTH)
    author_id: Optional[UserId] = None  # None for anonymous comments
    display_name: str = Field(min_length=1, max_length=50)
    is_anonymous: bool = False
    text: str = Field(min_length=1, max_length=2000)
    is_edited: bool = False
    last_edited_at: Optional[datetime] = None
    is_active: bool = True
    deleted_at: Optional[datetime] = None
    deleted_by: Optional[UserId] = None
    deletion_reason: Optional[str] = None
    like_count: int = Field(default=0, ge=0)
    flag_count: int = Field(default=0, ge=0)
    needs_review: bool = False
    origin_ip: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def is_authored_by(self, user_id: UserId | None) -> bool:
        """Whether user_id wrote this comment. Anonymous comments have no owner."""
        return self.author_id is not None and self.author_id == user_id
