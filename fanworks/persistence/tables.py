"""SQLAlchemy table definitions for Fanworks comments.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.

User IDs are not foreign keys: accounts belong to the identity provider
and the users table only mirrors profiles it has pushed to us.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (profile mirror)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("handle", String(50), nullable=False),
    Column("role", String(20), nullable=False, server_default="user"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("role IN ('user', 'moderator', 'admin')", name="role_valid"),
)

Index("idx_users_handle", users_table.c.handle)

# ============================================================================
# CONTENT TABLE (content registry)
# ============================================================================
content_table = Table(
    "content",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("title", String(200), nullable=False),
    Column("comment_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("comment_count >= 0", name="comment_count_non_negative"),
)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True),
    Column(
        "content_id", UUID, ForeignKey("content.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "parent_id", UUID, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True
    ),
    Column("depth", Integer, nullable=False, server_default="0"),
    Column("author_id", UUID, nullable=True),  # NULL for anonymous comments
    Column("display_name", String(50), nullable=False),  # Denormalized handle
    Column("is_anonymous", Boolean, nullable=False, server_default="false"),
    Column("text", Text, nullable=False),
    Column("is_edited", Boolean, nullable=False, server_default="false"),
    Column("last_edited_at", TIMESTAMP(timezone=True), nullable=True),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
    Column("deleted_by", UUID, nullable=True),
    Column("deletion_reason", Text, nullable=True),
    Column("like_count", Integer, nullable=False, server_default="0"),
    Column("flag_count", Integer, nullable=False, server_default="0"),
    Column("needs_review", Boolean, nullable=False, server_default="false"),
    Column("origin_ip", String(45), nullable=True),  # Forensics only
    Column("user_agent", Text, nullable=True),  # Forensics only
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("depth BETWEEN 0 AND 2", name="depth_in_range"),
    CheckConstraint("char_length(text) BETWEEN 1 AND 2000", name="text_length"),
    CheckConstraint("like_count >= 0", name="like_count_non_negative"),
    CheckConstraint("flag_count >= 0", name="flag_count_non_negative"),
)

Index("idx_comments_content_id", comments_table.c.content_id, comments_table.c.depth)
Index("idx_comments_parent_id", comments_table.c.parent_id)
Index("idx_comments_author_id", comments_table.c.author_id)
Index("idx_comments_created_at", comments_table.c.created_at)
Index("idx_comments_needs_review", comments_table.c.needs_review)

# ============================================================================
# COMMENT LIKES TABLE
# ============================================================================
comment_likes_table = Table(
    "comment_likes",
    metadata,
    Column(
        "comment_id",
        UUID,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("user_id", UUID, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("comment_id", "user_id", name="unique_comment_like"),
)

Index("idx_comment_likes_user_id", comment_likes_table.c.user_id)

# ============================================================================
# COMMENT FLAGS TABLE
# ============================================================================
comment_flags_table = Table(
    "comment_flags",
    metadata,
    Column("id", UUID, primary_key=True),
    Column(
        "comment_id",
        UUID,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("user_id", UUID, nullable=False),
    Column("reason", String(20), nullable=False),
    Column(
        "flagged_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("comment_id", "user_id", name="unique_comment_flag"),
    CheckConstraint(
        "reason IN ('spam', 'harassment', 'inappropriate', 'other')",
        name="flag_reason_valid",
    ),
)

# ============================================================================
# COMMENT EDIT HISTORY TABLE (append-only)
# ============================================================================
comment_edit_history_table = Table(
    "comment_edit_history",
    metadata,
    Column("id", UUID, primary_key=True),
    Column(
        "comment_id",
        UUID,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("previous_text", Text, nullable=False),
    Column("edited_by", UUID, nullable=False),
    Column(
        "edited_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_comment_edit_history_comment_id",
    comment_edit_history_table.c.comment_id,
    comment_edit_history_table.c.edited_at,
)
