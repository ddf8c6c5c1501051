"""Like and flag routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie
from pydantic import BaseModel

from fanworks.application.usecase.interaction import (
    FlagCommentRequest,
    FlagCommentResponse,
    FlagCommentUseCase,
    ToggleLikeRequest,
    ToggleLikeResponse,
    ToggleLikeUseCase,
)
from fanworks.domain.service import JWTService
from fanworks.interface.api.identity import require_requester

router = APIRouter(tags=["interactions"], route_class=DishkaRoute)


class FlagCommentAPIRequest(BaseModel):
    """API request for flagging a comment."""

    reason: str  # spam | harassment | inappropriate | other


@router.post("/comments/{comment_id}/like", response_model=ToggleLikeResponse)
async def toggle_like(
    comment_id: str,
    toggle_like_use_case: FromDishka[ToggleLikeUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ToggleLikeResponse:
    """Like a comment, or remove the like if the caller already liked it.

    Requires authentication.

    Args:
        comment_id: Comment UUID
        toggle_like_use_case: Toggle like use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Whether the caller now likes the comment, and the like count

    Raises:
        HTTPException: If not authenticated
    """
    requester = require_requester(jwt_service, auth_token, "like comments")
    return await toggle_like_use_case.execute(
        ToggleLikeRequest(comment_id=comment_id, user_id=requester.user_id)
    )


@router.post("/comments/{comment_id}/flag", response_model=FlagCommentResponse)
async def flag_comment(
    comment_id: str,
    request: FlagCommentAPIRequest,
    flag_comment_use_case: FromDishka[FlagCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> FlagCommentResponse:
    """Flag a comment for moderator attention.

    Each user flags a comment at most once; repeats are no-ops.

    Raises:
        HTTPException: If not authenticated
    """
    requester = require_requester(jwt_service, auth_token, "flag comments")
    return await flag_comment_use_case.execute(
        FlagCommentRequest(
            comment_id=comment_id,
            user_id=requester.user_id,
            reason=request.reason,
        )
    )
