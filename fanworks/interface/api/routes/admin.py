"""Moderation routes for moderators and admins."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie

from fanworks.application.usecase.moderation import (
    HardDeleteCommentRequest,
    HardDeleteCommentUseCase,
    HardDeleteContentCommentsRequest,
    HardDeleteContentCommentsUseCase,
    HardDeleteResponse,
    ListForReviewRequest,
    ListForReviewResponse,
    ListForReviewUseCase,
)
from fanworks.domain.service import JWTService
from fanworks.interface.api.identity import require_requester

router = APIRouter(prefix="/admin", tags=["admin"], route_class=DishkaRoute)


@router.get("/comments", response_model=ListForReviewResponse)
async def list_comments_for_review(
    list_for_review_use_case: FromDishka[ListForReviewUseCase],
    jwt_service: FromDishka[JWTService],
    page: int = 1,
    page_size: int | None = None,
    needs_review: bool = False,
    include_inactive: bool = True,
    search: str | None = None,
    auth_token: str | None = Cookie(default=None),
) -> ListForReviewResponse:
    """List comments for moderation, newest first.

    Includes origin address and user agent. Moderators and admins only.

    Args:
        list_for_review_use_case: Review listing use case from DI
        jwt_service: JWT service for token verification (injected)
        page: 1-based page number
        page_size: Comments per page
        needs_review: Only comments that crossed the flag threshold
        include_inactive: Include soft-deleted comments
        search: Case-insensitive text filter
        auth_token: JWT token from cookie

    Returns:
        Page of comments with moderation fields

    Raises:
        HTTPException: If not authenticated
    """
    requester = require_requester(jwt_service, auth_token, "review comments")
    return await list_for_review_use_case.execute(
        ListForReviewRequest(
            requester=requester,
            page=page,
            page_size=page_size,
            needs_review_only=needs_review,
            include_inactive=include_inactive,
            search=search,
        )
    )


@router.delete("/comments/{comment_id}", response_model=HardDeleteResponse)
async def hard_delete_comment(
    comment_id: str,
    hard_delete_comment_use_case: FromDishka[HardDeleteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> HardDeleteResponse:
    """Permanently remove a comment and all of its replies (admins only)."""
    requester = require_requester(jwt_service, auth_token, "remove comments")
    return await hard_delete_comment_use_case.execute(
        HardDeleteCommentRequest(comment_id=comment_id, requester=requester)
    )


@router.delete("/content/{content_id}/comments", response_model=HardDeleteResponse)
async def hard_delete_content_comments(
    content_id: str,
    hard_delete_content_use_case: FromDishka[HardDeleteContentCommentsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> HardDeleteResponse:
    """Permanently remove every comment on a content item (admins only)."""
    requester = require_requester(jwt_service, auth_token, "remove comments")
    return await hard_delete_content_use_case.execute(
        HardDeleteContentCommentsRequest(content_id=content_id, requester=requester)
    )
