"""Models and helpers shared by use cases."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from fanworks.domain.model import Comment
from fanworks.domain.service import UserService
from fanworks.domain.value import Identity, UserId, UserRole


class Requester(BaseModel):
    """Verified token claims of the caller, None fields for anonymous."""

    user_id: str | None = None
    handle: str | None = None
    role: UserRole = UserRole.USER

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None and self.handle is not None


class CommentItem(BaseModel):
    """Public view of a comment.

    Never carries the origin address or user agent.
    """

    comment_id: str
    content_id: str
    parent_id: str | None
    depth: int
    author_id: str | None
    display_name: str
    is_anonymous: bool
    text: str
    is_edited: bool
    last_edited_at: datetime | None
    is_active: bool
    like_count: int
    liked_by_me: bool = False
    created_at: datetime
    updated_at: datetime


class ThreadItem(CommentItem):
    """Comment with its visible replies attached."""

    replies: list["ThreadItem"] = []


class PageInfo(BaseModel):
    """Pagination metadata."""

    current_page: int
    page_size: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


def to_comment_item(comment: Comment, liked: bool = False) -> CommentItem:
    """Convert a comment to its public view."""
    return CommentItem(**_public_fields(comment), liked_by_me=liked)


def to_thread_item(
    comment: Comment, replies: list[ThreadItem], liked: bool = False
) -> ThreadItem:
    """Convert a comment and its converted replies to a thread item."""
    return ThreadItem(**_public_fields(comment), liked_by_me=liked, replies=replies)


def page_info(page: int, page_size: int, total: int, total_pages: int) -> PageInfo:
    """Build pagination metadata."""
    return PageInfo(
        current_page=page,
        page_size=page_size,
        total=total,
        total_pages=total_pages,
        has_next=page < total_pages,
        has_prev=page > 1,
    )


def _public_fields(comment: Comment) -> dict:
    return {
        "comment_id": str(comment.id),
        "content_id": str(comment.content_id),
        "parent_id": str(comment.parent_id) if comment.parent_id else None,
        "depth": comment.depth,
        "author_id": str(comment.author_id) if comment.author_id else None,
        "display_name": comment.display_name,
        "is_anonymous": comment.is_anonymous,
        "text": comment.text,
        "is_edited": comment.is_edited,
        "last_edited_at": comment.last_edited_at,
        "is_active": comment.is_active,
        "like_count": comment.like_count,
        "created_at": comment.created_at,
        "updated_at": comment.updated_at,
    }


ThreadItem.model_rebuild()


async def resolve_identity(
    user_service: UserService, requester: Requester
) -> Identity | None:
    """Resolve the caller to an Identity, None for anonymous callers."""
    if not requester.is_authenticated:
        return None
    return await user_service.resolve_identity(
        UserId(UUID(requester.user_id)), requester.handle, requester.role
    )
