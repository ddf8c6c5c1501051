"""List comments for review use case."""

from datetime import datetime

from pydantic import BaseModel

from fanworks.application.usecase.base import BaseUseCase
from fanworks.application.usecase.common import (
    CommentItem,
    PageInfo,
    Requester,
    page_info,
    resolve_identity,
    to_comment_item,
)
from fanworks.domain.error import NotAuthorizedError
from fanworks.domain.model import Comment
from fanworks.domain.service import ModerationService, UserService


class ReviewItem(CommentItem):
    """Moderator view of a comment, including forensic fields."""

    flag_count: int
    needs_review: bool
    deleted_at: datetime | None
    deleted_by: str | None
    deletion_reason: str | None
    origin_ip: str | None
    user_agent: str | None


class ListForReviewRequest(BaseModel):
    """List comments for review request."""

    requester: Requester
    page: int = 1
    page_size: int | None = None
    needs_review_only: bool = False
    include_inactive: bool = True
    search: str | None = None


class ListForReviewResponse(BaseModel):
    """List comments for review response."""

    comments: list[ReviewItem]
    pagination: PageInfo


def to_review_item(comment: Comment) -> ReviewItem:
    """Convert a comment to its moderator view."""
    return ReviewItem(
        **to_comment_item(comment).model_dump(),
        flag_count=comment.flag_count,
        needs_review=comment.needs_review,
        deleted_at=comment.deleted_at,
        deleted_by=str(comment.deleted_by) if comment.deleted_by else None,
        deletion_reason=comment.deletion_reason,
        origin_ip=comment.origin_ip,
        user_agent=comment.user_agent,
    )


class ListForReviewUseCase(BaseUseCase):
    """Use case for the moderation listing (moderators and admins)."""

    def __init__(
        self,
        moderation_service: ModerationService,
        user_service: UserService,
    ) -> None:
        """Initialize list for review use case.

        Args:
            moderation_service: Moderation domain service
            user_service: User service for resolving the caller's role
        """
        self.moderation_service = moderation_service
        self.user_service = user_service

    async def execute(self, request: ListForReviewRequest) -> ListForReviewResponse:
        """Execute review listing flow, newest first.

        Raises:
            NotAuthorizedError: If the caller is not a moderator or admin
            ValidationError: If pagination parameters are out of range
        """
        identity = await resolve_identity(self.user_service, request.requester)
        if identity is None:
            raise NotAuthorizedError("list", "comments", "for review")

        result = await self.moderation_service.list_for_review(
            requester_role=identity.role,
            page=request.page,
            page_size=request.page_size,
            needs_review_only=request.needs_review_only,
            search=request.search,
            include_inactive=request.include_inactive,
        )
        return ListForReviewResponse(
            comments=[to_review_item(c) for c in result.items],
            pagination=page_info(
                result.page, result.page_size, result.total, result.total_pages
            ),
        )
