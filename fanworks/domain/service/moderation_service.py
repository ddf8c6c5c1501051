"""Moderation domain service."""

from collections import defaultdict, deque
from dataclasses import dataclass
from datetime import timedelta
from math import ceil
from typing import Iterable
from uuid import uuid4

import logfire

from fanworks.config import CommentSettings
from fanworks.domain.error import (
    CommentInactiveError,
    EditWindowExpiredError,
    NotAuthorizedError,
    NotFoundError,
)
from fanworks.domain.model import Comment, EditHistory, utcnow
from fanworks.domain.repository import (
    CommentRepository,
    ContentRegistry,
    EditHistoryRepository,
    FlagRepository,
    LikeRepository,
)
from fanworks.domain.value import (
    CommentId,
    ContentId,
    EditHistoryId,
    UserId,
    UserRole,
)

from .base import Service, check_pagination, clean_comment_text


@dataclass
class ReviewPage:
    """One page of the moderation listing."""

    items: list[Comment]
    page: int
    page_size: int
    total: int

    @property
    def total_pages(self) -> int:
        return ceil(self.total / self.page_size) if self.total else 0


def collect_subtree_ids(root_id: CommentId, comments: Iterable[Comment]) -> list[CommentId]:
    """Collect a comment and all of its descendants.

    Builds a parent -> children index over the flat rows, then walks it
    breadth first from root_id.

    Args:
        root_id: Root of the subtree
        comments: Flat comment rows of the content item

    Returns:
        IDs of root_id and every descendant, root first
    """
    children: dict[CommentId, list[CommentId]] = defaultdict(list)
    for comment in comments:
        if comment.parent_id is not None:
            children[comment.parent_id].append(comment.id)

    collected = []
    queue = deque([root_id])
    seen = set()
    while queue:
        current = queue.popleft()
        if current in seen:
            continue
        seen.add(current)
        collected.append(current)
        queue.extend(children.get(current, []))
    return collected


class ModerationService(Service):
    """Domain service for edits, deletions and the review queue.

    State transitions of a comment:

        active --edit--> active (author, within the edit window)
        active --soft_delete--> inactive (author, moderator or admin)
        any --hard_delete--> removed, with all descendants (admin)

    There is no undelete.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        edit_history_repository: EditHistoryRepository,
        like_repository: LikeRepository,
        flag_repository: FlagRepository,
        content_registry: ContentRegistry,
        comment_settings: CommentSettings,
    ) -> None:
        """Initialize moderation service.

        Args:
            comment_repository: Comment repository
            edit_history_repository: Edit history repository
            like_repository: Like repository
            flag_repository: Flag repository
            content_registry: Registry of content items (comment counts)
            comment_settings: Comment rules (edit window, placeholder)
        """
        self.comment_repository = comment_repository
        self.edit_history_repository = edit_history_repository
        self.like_repository = like_repository
        self.flag_repository = flag_repository
        self.content_registry = content_registry
        self.settings = comment_settings

    async def _lock_comment(self, comment_id: CommentId) -> Comment:
        comment = await self.comment_repository.find_by_id_for_update(comment_id)
        if not comment:
            logfire.warn("Comment not found", comment_id=str(comment_id))
            raise NotFoundError("Comment", str(comment_id))
        return comment

    async def edit_comment(
        self,
        comment_id: CommentId,
        requester_id: UserId,
        new_text: str,
    ) -> Comment:
        """Edit a comment's text, keeping the previous text in its history.

        Only the author can edit, and only within the edit window. The
        history append and the text overwrite run in the same transaction
        with the comment row locked.

        Args:
            comment_id: Comment ID
            requester_id: Authenticated user ID
            new_text: Replacement text

        Returns:
            Updated comment

        Raises:
            NotFoundError: If the comment does not exist
            CommentInactiveError: If the comment was deleted
            NotAuthorizedError: If the requester is not the author
            EditWindowExpiredError: If the edit window has passed
            ValidationError: If the new text is invalid
        """
        with logfire.span(
            "moderation_service.edit_comment",
            comment_id=str(comment_id),
            requester_id=str(requester_id),
        ):
            comment = await self._lock_comment(comment_id)

            if not comment.is_active:
                logfire.warn("Edit of deleted comment", comment_id=str(comment_id))
                raise CommentInactiveError(str(comment_id), "edit")

            if not comment.is_authored_by(requester_id):
                logfire.warn(
                    "Unauthorized comment edit",
                    comment_id=str(comment_id),
                    requester_id=str(requester_id),
                )
                raise NotAuthorizedError("edit", "comment", str(comment_id))

            now = utcnow()
            window = timedelta(hours=self.settings.edit_window_hours)
            if now - comment.created_at > window:
                logfire.warn(
                    "Edit window expired",
                    comment_id=str(comment_id),
                    created_at=comment.created_at.isoformat(),
                )
                raise EditWindowExpiredError(
                    str(comment_id), self.settings.edit_window_hours
                )

            clean_text = clean_comment_text(new_text, self.settings.max_length)

            await self.edit_history_repository.append(
                EditHistory(
                    id=EditHistoryId(uuid4()),
                    comment_id=comment_id,
                    previous_text=comment.text,
                    edited_by=requester_id,
                    edited_at=now,
                )
            )
            updated = await self.comment_repository.update_text(
                comment_id, clean_text, now
            )
            if not updated:
                raise NotFoundError("Comment", str(comment_id))

            logfire.info("Comment edited", comment_id=str(comment_id))
            return updated

    async def soft_delete(
        self,
        comment_id: CommentId,
        requester_id: UserId,
        requester_role: UserRole,
        reason: str | None = None,
    ) -> Comment:
        """Soft delete a comment.

        The comment stays in its thread with placeholder text so replies
        keep their place. Replies are not affected.

        Args:
            comment_id: Comment ID
            requester_id: Authenticated user ID
            requester_role: Role of the requester
            reason: Optional moderator note

        Returns:
            Deactivated comment

        Raises:
            NotFoundError: If the comment does not exist
            CommentInactiveError: If the comment was already deleted
            NotAuthorizedError: If the requester is neither author nor moderator
        """
        with logfire.span(
            "moderation_service.soft_delete",
            comment_id=str(comment_id),
            requester_id=str(requester_id),
            requester_role=requester_role.value,
        ):
            comment = await self._lock_comment(comment_id)

            if not comment.is_active:
                logfire.warn("Comment already deleted", comment_id=str(comment_id))
                raise CommentInactiveError(str(comment_id), "delete")

            is_author = comment.is_authored_by(requester_id)
            if not is_author and not requester_role.can_moderate:
                logfire.warn(
                    "Unauthorized comment delete",
                    comment_id=str(comment_id),
                    requester_id=str(requester_id),
                )
                raise NotAuthorizedError("delete", "comment", str(comment_id))

            deleted = await self.comment_repository.soft_delete(
                comment_id,
                placeholder=self.settings.deleted_placeholder,
                deleted_at=utcnow(),
                deleted_by=requester_id,
                reason=reason,
            )
            if not deleted:
                raise CommentInactiveError(str(comment_id), "delete")

            logfire.info(
                "Comment soft deleted",
                comment_id=str(comment_id),
                by_moderator=not is_author,
            )
            return deleted

    async def _purge(self, comment_ids: list[CommentId]) -> int:
        """Delete comments together with their likes, flags and history."""
        await self.like_repository.delete_by_comments(comment_ids)
        await self.flag_repository.delete_by_comments(comment_ids)
        await self.edit_history_repository.delete_by_comments(comment_ids)
        return await self.comment_repository.delete_many(comment_ids)

    async def hard_delete_comment(
        self, comment_id: CommentId, requester_role: UserRole
    ) -> int:
        """Physically remove a comment and all of its descendants.

        Args:
            comment_id: Root of the subtree to remove
            requester_role: Role of the requester

        Returns:
            Number of comments removed

        Raises:
            NotAuthorizedError: If the requester is not an admin
            NotFoundError: If the comment does not exist
        """
        with logfire.span(
            "moderation_service.hard_delete_comment",
            comment_id=str(comment_id),
            requester_role=requester_role.value,
        ):
            if requester_role != UserRole.ADMIN:
                logfire.warn("Unauthorized hard delete", comment_id=str(comment_id))
                raise NotAuthorizedError("hard delete", "comment", str(comment_id))

            comment = await self._lock_comment(comment_id)
            rows = await self.comment_repository.find_by_content(comment.content_id)
            subtree = collect_subtree_ids(comment_id, rows)

            removed = await self._purge(subtree)
            if removed:
                await self.content_registry.adjust_comment_count(
                    comment.content_id, -removed
                )

            logfire.info(
                "Comment hard deleted",
                comment_id=str(comment_id),
                content_id=str(comment.content_id),
                removed=removed,
            )
            return removed

    async def hard_delete_content(
        self, content_id: ContentId, requester_role: UserRole
    ) -> int:
        """Physically remove every comment of a content item.

        Args:
            content_id: Content item
            requester_role: Role of the requester

        Returns:
            Number of comments removed

        Raises:
            NotAuthorizedError: If the requester is not an admin
            NotFoundError: If the content item does not exist
        """
        with logfire.span(
            "moderation_service.hard_delete_content",
            content_id=str(content_id),
            requester_role=requester_role.value,
        ):
            if requester_role != UserRole.ADMIN:
                logfire.warn("Unauthorized content purge", content_id=str(content_id))
                raise NotAuthorizedError("hard delete comments of", "content", str(content_id))

            if not await self.content_registry.exists(content_id):
                raise NotFoundError("Content", str(content_id))

            rows = await self.comment_repository.find_by_content(content_id)
            ids = [row.id for row in rows]
            removed = 0
            if ids:
                await self.like_repository.delete_by_comments(ids)
                await self.flag_repository.delete_by_comments(ids)
                await self.edit_history_repository.delete_by_comments(ids)
                removed = await self.comment_repository.delete_by_content(content_id)
                await self.content_registry.adjust_comment_count(content_id, -removed)

            logfire.info(
                "Content comments hard deleted",
                content_id=str(content_id),
                removed=removed,
            )
            return removed

    async def get_edit_history(
        self,
        comment_id: CommentId,
        requester_id: UserId,
        requester_role: UserRole,
    ) -> list[EditHistory]:
        """Get the previous texts of a comment, oldest first.

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the requester is neither author nor moderator
        """
        with logfire.span(
            "moderation_service.get_edit_history",
            comment_id=str(comment_id),
            requester_id=str(requester_id),
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                raise NotFoundError("Comment", str(comment_id))
            if not comment.is_authored_by(requester_id) and not requester_role.can_moderate:
                raise NotAuthorizedError("view history of", "comment", str(comment_id))
            return await self.edit_history_repository.find_by_comment(comment_id)

    async def list_for_review(
        self,
        requester_role: UserRole,
        page: int = 1,
        page_size: int | None = None,
        needs_review_only: bool = False,
        search: str | None = None,
        include_inactive: bool = True,
    ) -> ReviewPage:
        """List comments for moderators, newest first.

        Raises:
            NotAuthorizedError: If the requester is not a moderator or admin
            ValidationError: If pagination parameters are out of range
        """
        page_size = page_size or self.settings.default_page_size
        with logfire.span(
            "moderation_service.list_for_review",
            page=page,
            page_size=page_size,
            needs_review_only=needs_review_only,
        ):
            if not requester_role.can_moderate:
                raise NotAuthorizedError("list", "comments", "for review")
            offset = check_pagination(page, page_size, self.settings.max_page_size)

            search = search.strip() if search else None
            total = await self.comment_repository.count_for_review(
                needs_review_only=needs_review_only,
                include_inactive=include_inactive,
                search=search or None,
            )
            items = await self.comment_repository.find_for_review(
                needs_review_only=needs_review_only,
                include_inactive=include_inactive,
                search=search or None,
                limit=page_size,
                offset=offset,
            )
            logfire.info("Review listing retrieved", count=len(items), total=total)
            return ReviewPage(items=items, page=page, page_size=page_size, total=total)
