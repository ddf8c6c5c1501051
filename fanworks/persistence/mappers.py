"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from fanworks.domain.model import Comment, ContentItem, EditHistory, Flag, Like, User
from fanworks.domain.value import (
    CommentId,
    ContentId,
    EditHistoryId,
    Handle,
    UserId,
    UserRole,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _optional_uuid(value: Any) -> Optional[UUID]:
    return _uuid(value) if value else None


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        handle=Handle(row["handle"]),
        role=UserRole(row["role"]),
        created_at=row["created_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    return {
        "id": user.id,
        "handle": user.handle.root,
        "role": user.role.value,
        "created_at": user.created_at,
    }


def row_to_content(row: Dict[str, Any]) -> ContentItem:
    """Convert database row to ContentItem domain model."""
    return ContentItem(
        id=ContentId(_uuid(row["id"])),
        title=row["title"],
        comment_count=row["comment_count"],
        created_at=row["created_at"],
    )


def content_to_dict(item: ContentItem) -> Dict[str, Any]:
    """Convert ContentItem domain model to database dict."""
    return item.model_dump()


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    parent_id = _optional_uuid(row.get("parent_id"))
    author_id = _optional_uuid(row.get("author_id"))
    deleted_by = _optional_uuid(row.get("deleted_by"))
    return Comment(
        id=CommentId(_uuid(row["id"])),
        content_id=ContentId(_uuid(row["content_id"])),
        parent_id=CommentId(parent_id) if parent_id else None,
        depth=row["depth"],
        author_id=UserId(author_id) if author_id else None,
        display_name=row["display_name"],
        is_anonymous=row["is_anonymous"],
        text=row["text"],
        is_edited=row["is_edited"],
        last_edited_at=row.get("last_edited_at"),
        is_active=row["is_active"],
        deleted_at=row.get("deleted_at"),
        deleted_by=UserId(deleted_by) if deleted_by else None,
        deletion_reason=row.get("deletion_reason"),
        like_count=row["like_count"],
        flag_count=row["flag_count"],
        needs_review=row["needs_review"],
        origin_ip=row.get("origin_ip"),
        user_agent=row.get("user_agent"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion
    """
    return comment.model_dump()


def like_to_dict(like: Like) -> Dict[str, Any]:
    """Convert Like domain model to database dict."""
    return like.model_dump()


def flag_to_dict(flag: Flag) -> Dict[str, Any]:
    """Convert Flag domain model to database dict."""
    data = flag.model_dump()
    data["reason"] = flag.reason.value
    return data


def row_to_edit_history(row: Dict[str, Any]) -> EditHistory:
    """Convert database row to EditHistory domain model."""
    return EditHistory(
        id=EditHistoryId(_uuid(row["id"])),
        comment_id=CommentId(_uuid(row["comment_id"])),
        previous_text=row["previous_text"],
        edited_by=UserId(_uuid(row["edited_by"])),
        edited_at=row["edited_at"],
    )


def edit_history_to_dict(entry: EditHistory) -> Dict[str, Any]:
    """Convert EditHistory domain model to database dict."""
    return entry.model_dump()
