"""In-memory comment repository for testing."""

from datetime import datetime
from typing import Optional, Sequence

from fanworks.domain.model import utcnow
from fanworks.domain.model.comment import Comment
from fanworks.domain.repository.comment import CommentRepository
from fanworks.domain.value import CommentCounter, CommentId, ContentId, ThreadSort, UserId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing.

    Methods never await between reading and writing a comment, so each
    call is atomic within the event loop like the SQL statements it mirrors.
    """

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    def _children(self, parent_id: CommentId) -> list[Comment]:
        return [c for c in self._comments.values() if c.parent_id == parent_id]

    def _has_active_descendant(self, comment_id: CommentId) -> bool:
        for child in self._children(comment_id):
            if child.is_active or self._has_active_descendant(child.id):
                return True
        return False

    def _listable_top_level(self, content_id: ContentId) -> list[Comment]:
        return [
            c
            for c in self._comments.values()
            if c.content_id == content_id
            and c.parent_id is None
            and (c.is_active or self._has_active_descendant(c.id))
        ]

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_by_id_for_update(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID (no locking needed in memory)."""
        return self._comments.get(comment_id)

    async def save(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        self._comments[comment.id] = comment
        return comment

    async def find_top_level(
        self,
        content_id: ContentId,
        sort: ThreadSort,
        limit: int,
        offset: int,
    ) -> list[Comment]:
        """Find one page of listable top-level comments."""
        comments = self._listable_top_level(content_id)

        # Stable sorts: tie breakers first
        comments.sort(key=lambda c: str(c.id))
        if sort == ThreadSort.OLDEST:
            comments.sort(key=lambda c: c.created_at)
        elif sort == ThreadSort.MOST_LIKED:
            comments.sort(key=lambda c: c.created_at)
            comments.sort(key=lambda c: c.like_count, reverse=True)
        else:
            comments.sort(key=lambda c: c.created_at, reverse=True)

        return comments[offset : offset + limit]

    async def count_top_level(self, content_id: ContentId) -> int:
        """Count listable top-level comments."""
        return len(self._listable_top_level(content_id))

    async def find_by_parents(self, parent_ids: Sequence[CommentId]) -> list[Comment]:
        """Find direct replies of several comments."""
        wanted = set(parent_ids)
        comments = [c for c in self._comments.values() if c.parent_id in wanted]
        comments.sort(key=lambda c: (c.created_at, str(c.id)))
        return comments

    async def find_children(
        self,
        parent_id: CommentId,
        limit: int,
        offset: int,
        include_deleted: bool = False,
    ) -> list[Comment]:
        """Find one page of direct replies, oldest first."""
        comments = self._children(parent_id)

        # Filter deleted
        if not include_deleted:
            comments = [c for c in comments if c.is_active]

        comments.sort(key=lambda c: (c.created_at, str(c.id)))

        # Paginate
        return comments[offset : offset + limit]

    async def count_children(
        self, parent_id: CommentId, include_deleted: bool = False
    ) -> int:
        """Count direct replies to a comment."""
        return sum(
            1 for c in self._children(parent_id) if include_deleted or c.is_active
        )

    async def find_by_content(self, content_id: ContentId) -> list[Comment]:
        """Find every comment of a content item."""
        comments = [c for c in self._comments.values() if c.content_id == content_id]
        comments.sort(key=lambda c: (c.depth, c.created_at))
        return comments

    async def update_text(
        self,
        comment_id: CommentId,
        text: str,
        edited_at: datetime,
    ) -> Optional[Comment]:
        """Overwrite the text of an active comment."""
        comment = self._comments.get(comment_id)
        if not comment or not comment.is_active:
            return None

        updated = comment.model_copy(
            update={
                "text": text,
                "is_edited": True,
                "last_edited_at": edited_at,
                "updated_at": edited_at,
            }
        )
        self._comments[comment_id] = updated
        return updated

    async def soft_delete(
        self,
        comment_id: CommentId,
        placeholder: str,
        deleted_at: datetime,
        deleted_by: Optional[UserId] = None,
        reason: Optional[str] = None,
    ) -> Optional[Comment]:
        """Deactivate an active comment."""
        comment = self._comments.get(comment_id)
        if not comment or not comment.is_active:
            return None

        deleted = comment.model_copy(
            update={
                "is_active": False,
                "text": placeholder,
                "deleted_at": deleted_at,
                "deleted_by": deleted_by,
                "deletion_reason": reason,
                "updated_at": deleted_at,
            }
        )
        self._comments[comment_id] = deleted
        return deleted

    async def increment_counter(
        self, comment_id: CommentId, counter: CommentCounter, delta: int
    ) -> Optional[int]:
        """Add delta to a counter (minimum 0)."""
        comment = self._comments.get(comment_id)
        if not comment:
            return None

        value = max(getattr(comment, counter.value) + delta, 0)
        self._comments[comment_id] = comment.model_copy(
            update={counter.value: value, "updated_at": utcnow()}
        )
        return value

    async def mark_needs_review(self, comment_id: CommentId) -> None:
        """Set the needs_review marker."""
        comment = self._comments.get(comment_id)
        if comment:
            self._comments[comment_id] = comment.model_copy(
                update={"needs_review": True}
            )

    async def delete_many(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete comments (hard delete)."""
        removed = 0
        for comment_id in set(comment_ids):
            if self._comments.pop(comment_id, None) is not None:
                removed += 1
        return removed

    async def delete_by_content(self, content_id: ContentId) -> int:
        """Delete every comment of a content item."""
        ids = [c.id for c in self._comments.values() if c.content_id == content_id]
        for comment_id in ids:
            del self._comments[comment_id]
        return len(ids)

    def _review_matches(
        self,
        comment: Comment,
        needs_review_only: bool,
        include_inactive: bool,
        search: Optional[str],
    ) -> bool:
        if needs_review_only and not comment.needs_review:
            return False
        if not include_inactive and not comment.is_active:
            return False
        if search and search.lower() not in comment.text.lower():
            return False
        return True

    async def find_for_review(
        self,
        needs_review_only: bool = False,
        include_inactive: bool = True,
        search: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Comment]:
        """Find comments for the moderation listing, newest first."""
        comments = [
            c
            for c in self._comments.values()
            if self._review_matches(c, needs_review_only, include_inactive, search)
        ]
        comments.sort(key=lambda c: str(c.id))
        comments.sort(key=lambda c: c.created_at, reverse=True)
        return comments[offset : offset + limit]

    async def count_for_review(
        self,
        needs_review_only: bool = False,
        include_inactive: bool = True,
        search: Optional[str] = None,
    ) -> int:
        """Count comments matching the moderation listing filters."""
        return sum(
            1
            for c in self._comments.values()
            if self._review_matches(c, needs_review_only, include_inactive, search)
        )
