"""Thread domain service."""

from collections import defaultdict
from dataclasses import dataclass, field
from math import ceil
from uuid import uuid4

import logfire

from fanworks.config import CommentSettings
from fanworks.domain.error import NestingTooDeepError, NotFoundError, ValidationError
from fanworks.domain.model import Comment, utcnow
from fanworks.domain.repository import CommentRepository, ContentRegistry
from fanworks.domain.value import (
    ANONYMOUS_DISPLAY_NAME,
    CommentId,
    ContentId,
    Handle,
    ThreadSort,
    UserId,
)

from .base import Service, check_pagination, clean_comment_text


@dataclass
class ThreadNode:
    """A comment together with its visible replies."""

    comment: Comment
    replies: list["ThreadNode"] = field(default_factory=list)


@dataclass
class ThreadPage:
    """One page of top-level comments with their replies attached."""

    items: list[ThreadNode]
    page: int
    page_size: int
    total: int

    @property
    def total_pages(self) -> int:
        return ceil(self.total / self.page_size) if self.total else 0


@dataclass
class ReplyPage:
    """One page of direct replies to a comment."""

    parent_id: CommentId
    items: list[Comment]
    page: int
    page_size: int
    total: int

    @property
    def total_pages(self) -> int:
        return ceil(self.total / self.page_size) if self.total else 0


class ThreadService(Service):
    """Domain service for creating comments and reading threads."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        content_registry: ContentRegistry,
        comment_settings: CommentSettings,
    ) -> None:
        """Initialize thread service.

        Args:
            comment_repository: Comment repository
            content_registry: Registry of content items comments attach to
            comment_settings: Comment rules (length, depth, paging)
        """
        self.comment_repository = comment_repository
        self.content_registry = content_registry
        self.settings = comment_settings

    async def create_comment(
        self,
        content_id: ContentId,
        text: str,
        author_id: UserId | None = None,
        author_handle: Handle | None = None,
        parent_id: CommentId | None = None,
        wants_anonymous: bool = False,
        origin_ip: str | None = None,
        user_agent: str | None = None,
    ) -> Comment:
        """Create a top-level comment or a reply.

        Args:
            content_id: Content item the comment is attached to
            text: Comment text (trimmed before validation)
            author_id: Author user ID, None for anonymous requests
            author_handle: Author handle, used as display name
            parent_id: Parent comment ID for replies (None for top-level)
            wants_anonymous: Author asked to post anonymously
            origin_ip: Client address, kept for abuse forensics only
            user_agent: Client user agent, kept for abuse forensics only

        Returns:
            Created comment

        Raises:
            NotFoundError: If the content item does not exist
            ValidationError: If the text is invalid or the parent is unusable
            NestingTooDeepError: If the parent is already at maximum depth
        """
        with logfire.span(
            "thread_service.create_comment",
            content_id=str(content_id),
            author_id=str(author_id) if author_id else None,
            parent_id=str(parent_id) if parent_id else None,
            anonymous=wants_anonymous or author_id is None,
        ):
            if not await self.content_registry.exists(content_id):
                logfire.warn("Comment on missing content", content_id=str(content_id))
                raise NotFoundError("Content", str(content_id))

            clean_text = clean_comment_text(text, self.settings.max_length)

            # If replying, verify parent and calculate depth
            depth = 0
            if parent_id:
                parent = await self.comment_repository.find_by_id(parent_id)
                if not parent:
                    logfire.warn("Parent comment not found", parent_id=str(parent_id))
                    raise ValidationError("Parent comment not found")
                if parent.content_id != content_id:
                    logfire.warn(
                        "Parent comment belongs to other content",
                        parent_id=str(parent_id),
                        parent_content_id=str(parent.content_id),
                        target_content_id=str(content_id),
                    )
                    raise ValidationError(
                        "Parent comment does not belong to this content"
                    )
                if not parent.is_active:
                    logfire.warn("Reply to deleted comment", parent_id=str(parent_id))
                    raise ValidationError("Cannot reply to a deleted comment")
                if parent.depth >= self.settings.max_depth:
                    logfire.warn(
                        "Comment nesting too deep",
                        parent_id=str(parent_id),
                        parent_depth=parent.depth,
                    )
                    raise NestingTooDeepError(str(parent_id), self.settings.max_depth)
                depth = parent.depth + 1

            anonymous = wants_anonymous or author_id is None or author_handle is None
            now = utcnow()
            comment = Comment(
                id=CommentId(uuid4()),
                content_id=content_id,
                parent_id=parent_id,
                depth=depth,
                author_id=None if anonymous else author_id,
                display_name=ANONYMOUS_DISPLAY_NAME if anonymous else author_handle.root,
                is_anonymous=anonymous,
                text=clean_text,
                origin_ip=origin_ip,
                user_agent=user_agent,
                created_at=now,
                updated_at=now,
            )

            saved = await self.comment_repository.save(comment)
            await self.content_registry.adjust_comment_count(content_id, 1)
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                content_id=str(content_id),
                depth=depth,
            )
            return saved

    async def get_comment(self, comment_id: CommentId) -> Comment:
        """Get a comment by ID.

        Raises:
            NotFoundError: If the comment does not exist
        """
        comment = await self.comment_repository.find_by_id(comment_id)
        if not comment:
            logfire.warn("Comment not found", comment_id=str(comment_id))
            raise NotFoundError("Comment", str(comment_id))
        return comment

    async def get_thread(
        self,
        content_id: ContentId,
        page: int = 1,
        page_size: int | None = None,
        sort: ThreadSort = ThreadSort.NEWEST,
    ) -> ThreadPage:
        """Get one page of top-level comments with their replies attached.

        Pagination runs over top-level comments only. A deleted top-level
        comment still appears (with placeholder text) while any of its
        replies are active, so page boundaries stay stable and no subtree
        disappears. Replies are always chronological.

        Args:
            content_id: Content item
            page: 1-based page number
            page_size: Top-level comments per page (defaults to settings)
            sort: Ordering of top-level comments

        Returns:
            Thread page

        Raises:
            NotFoundError: If the content item does not exist
            ValidationError: If pagination parameters are out of range
        """
        page_size = page_size or self.settings.default_page_size
        with logfire.span(
            "thread_service.get_thread",
            content_id=str(content_id),
            page=page,
            page_size=page_size,
            sort=sort.value,
        ):
            offset = check_pagination(page, page_size, self.settings.max_page_size)
            if not await self.content_registry.exists(content_id):
                logfire.warn("Thread of missing content", content_id=str(content_id))
                raise NotFoundError("Content", str(content_id))

            total = await self.comment_repository.count_top_level(content_id)
            top_level = await self.comment_repository.find_top_level(
                content_id=content_id,
                sort=sort,
                limit=page_size,
                offset=offset,
            )

            # Fetch replies level by level, one batch query per level
            children_of: dict[CommentId, list[Comment]] = defaultdict(list)
            frontier = [comment.id for comment in top_level]
            for _ in range(self.settings.max_depth):
                if not frontier:
                    break
                replies = await self.comment_repository.find_by_parents(frontier)
                for reply in replies:
                    children_of[reply.parent_id].append(reply)
                frontier = [reply.id for reply in replies]

            items = [
                ThreadNode(
                    comment=comment,
                    replies=self._visible_replies(comment.id, children_of),
                )
                for comment in top_level
            ]
            logfire.info(
                "Thread retrieved",
                content_id=str(content_id),
                top_level=len(items),
                total=total,
            )
            return ThreadPage(items=items, page=page, page_size=page_size, total=total)

    def _visible_replies(
        self,
        parent_id: CommentId,
        children_of: dict[CommentId, list[Comment]],
    ) -> list[ThreadNode]:
        """Build reply nodes, pruning deleted replies without active descendants."""
        nodes = []
        for child in sorted(
            children_of.get(parent_id, []), key=lambda c: (c.created_at, str(c.id))
        ):
            replies = self._visible_replies(child.id, children_of)
            if child.is_active or replies:
                nodes.append(ThreadNode(comment=child, replies=replies))
        return nodes

    async def get_replies(
        self,
        comment_id: CommentId,
        page: int = 1,
        page_size: int | None = None,
    ) -> ReplyPage:
        """Get one page of direct replies to a comment, oldest first.

        Deleted replies are kept as placeholders so that their own replies
        remain reachable.

        Raises:
            NotFoundError: If the comment does not exist
            ValidationError: If pagination parameters are out of range
        """
        page_size = page_size or self.settings.default_page_size
        with logfire.span(
            "thread_service.get_replies",
            comment_id=str(comment_id),
            page=page,
            page_size=page_size,
        ):
            offset = check_pagination(page, page_size, self.settings.max_page_size)
            await self.get_comment(comment_id)

            total = await self.comment_repository.count_children(
                comment_id, include_deleted=True
            )
            replies = await self.comment_repository.find_children(
                comment_id, limit=page_size, offset=offset, include_deleted=True
            )
            return ReplyPage(
                parent_id=comment_id,
                items=replies,
                page=page,
                page_size=page_size,
                total=total,
            )
