"""Comment repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence

from fanworks.domain.model.comment import Comment
from fanworks.domain.value import CommentCounter, CommentId, ContentId, ThreadSort, UserId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations. Together with
    the like, flag and edit history repositories this is the comment store.
    Implementations live in the persistence layer.

    Every mutating method is a single statement (or runs inside the request
    transaction), so readers never observe a half-applied change.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID, active or not.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_id_for_update(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID and lock its row until the transaction ends.

        Used by edits and deletes so that the check and the write see the
        same version of the row.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Insert a new comment.

        Args:
            comment: The comment to insert

        Returns:
            The stored comment
        """
        pass

    @abstractmethod
    async def find_top_level(
        self,
        content_id: ContentId,
        sort: ThreadSort,
        limit: int,
        offset: int,
    ) -> List[Comment]:
        """Find one page of top-level comments for a content item.

        Only listable comments are returned: active ones, and inactive ones
        that still have an active descendant.

        Ordering:
        - newest: created_at descending
        - oldest: created_at ascending
        - most_liked: like_count descending, then created_at ascending

        Args:
            content_id: The content item
            sort: Ordering of the page
            limit: Maximum number of comments to return
            offset: Number of comments to skip

        Returns:
            List of top-level comments
        """
        pass

    @abstractmethod
    async def count_top_level(self, content_id: ContentId) -> int:
        """Count listable top-level comments for a content item.

        Uses the same visibility rule as find_top_level.

        Args:
            content_id: The content item

        Returns:
            Number of listable top-level comments
        """
        pass

    @abstractmethod
    async def find_by_parents(self, parent_ids: Sequence[CommentId]) -> List[Comment]:
        """Find the direct replies of several comments (batch query).

        Inactive replies are included; callers decide what to show.

        Args:
            parent_ids: Parent comment IDs

        Returns:
            Replies ordered by created_at ascending
        """
        pass

    @abstractmethod
    async def find_children(
        self,
        parent_id: CommentId,
        limit: int,
        offset: int,
        include_deleted: bool = False,
    ) -> List[Comment]:
        """Find one page of direct replies to a comment, oldest first.

        Args:
            parent_id: The parent comment ID
            limit: Maximum number of replies to return
            offset: Number of replies to skip
            include_deleted: Whether to include soft-deleted replies

        Returns:
            List of replies
        """
        pass

    @abstractmethod
    async def count_children(
        self, parent_id: CommentId, include_deleted: bool = False
    ) -> int:
        """Count direct replies to a comment.

        Args:
            parent_id: The parent comment ID
            include_deleted: Whether to include soft-deleted replies

        Returns:
            Number of replies
        """
        pass

    @abstractmethod
    async def find_by_content(self, content_id: ContentId) -> List[Comment]:
        """Find every comment of a content item, including inactive ones.

        Args:
            content_id: The content item

        Returns:
            All comments of the content item
        """
        pass

    @abstractmethod
    async def update_text(
        self,
        comment_id: CommentId,
        text: str,
        edited_at: datetime,
    ) -> Optional[Comment]:
        """Overwrite the text of an active comment and mark it edited.

        Args:
            comment_id: Comment ID
            text: New text
            edited_at: Edit timestamp

        Returns:
            Updated comment, or None if it does not exist or is inactive
        """
        pass

    @abstractmethod
    async def soft_delete(
        self,
        comment_id: CommentId,
        placeholder: str,
        deleted_at: datetime,
        deleted_by: Optional[UserId] = None,
        reason: Optional[str] = None,
    ) -> Optional[Comment]:
        """Deactivate an active comment and replace its text.

        Args:
            comment_id: Comment ID
            placeholder: Text shown in place of the comment
            deleted_at: Deletion timestamp
            deleted_by: User who deleted the comment
            reason: Optional moderator reason

        Returns:
            Updated comment, or None if it does not exist or was already inactive
        """
        pass

    @abstractmethod
    async def increment_counter(
        self, comment_id: CommentId, counter: CommentCounter, delta: int
    ) -> Optional[int]:
        """Atomically add delta to a denormalized counter.

        The counter never goes below zero.

        Args:
            comment_id: Comment ID
            counter: Which counter to change
            delta: Amount to add (negative to subtract)

        Returns:
            The new counter value, or None if the comment does not exist
        """
        pass

    @abstractmethod
    async def mark_needs_review(self, comment_id: CommentId) -> None:
        """Set the needs_review marker on a comment.

        Args:
            comment_id: Comment ID
        """
        pass

    @abstractmethod
    async def delete_many(self, comment_ids: Sequence[CommentId]) -> int:
        """Physically delete comments (hard delete).

        Args:
            comment_ids: IDs of the comments to delete

        Returns:
            Number of comments deleted
        """
        pass

    @abstractmethod
    async def delete_by_content(self, content_id: ContentId) -> int:
        """Physically delete every comment of a content item.

        Args:
            content_id: The content item

        Returns:
            Number of comments deleted
        """
        pass

    @abstractmethod
    async def find_for_review(
        self,
        needs_review_only: bool = False,
        include_inactive: bool = True,
        search: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Comment]:
        """Find comments for the moderation listing, newest first.

        Args:
            needs_review_only: Only comments marked for review
            include_inactive: Whether to include soft-deleted comments
            search: Case-insensitive substring of the text
            limit: Maximum number of comments to return
            offset: Number of comments to skip

        Returns:
            List of comments
        """
        pass

    @abstractmethod
    async def count_for_review(
        self,
        needs_review_only: bool = False,
        include_inactive: bool = True,
        search: Optional[str] = None,
    ) -> int:
        """Count comments matching the moderation listing filters."""
        pass
