"""Comment routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Body, Cookie, Request, status
from pydantic import BaseModel

from fanworks.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    EditCommentRequest,
    EditCommentResponse,
    EditCommentUseCase,
    GetEditHistoryRequest,
    GetEditHistoryResponse,
    GetEditHistoryUseCase,
    GetRepliesRequest,
    GetRepliesResponse,
    GetRepliesUseCase,
    GetThreadRequest,
    GetThreadResponse,
    GetThreadUseCase,
)
from fanworks.domain.service import JWTService
from fanworks.domain.value import ThreadSort
from fanworks.interface.api.identity import (
    client_details,
    get_requester,
    require_requester,
)

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment.

    Text limits are enforced on the trimmed text by the thread service.
    """

    text: str
    parent_id: str | None = None  # Parent comment ID for replies
    is_anonymous: bool = False


class EditCommentAPIRequest(BaseModel):
    """API request for editing a comment."""

    text: str


class DeleteCommentAPIRequest(BaseModel):
    """API request for soft deleting a comment."""

    reason: str | None = None


@router.post(
    "/content/{content_id}/comments",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    content_id: str,
    request: CreateCommentAPIRequest,
    http_request: Request,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateCommentResponse:
    """Comment on a content item or reply to another comment.

    Anonymous commenting is allowed. Authenticated users may still ask
    for their handle to be hidden with ``is_anonymous``.

    Args:
        content_id: Content item UUID
        request: Comment creation data
        http_request: Raw request, for the client address and user agent
        create_comment_use_case: Create comment use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Created comment
    """
    origin_ip, user_agent = client_details(http_request)
    use_case_request = CreateCommentRequest(
        content_id=content_id,
        text=request.text,
        parent_id=request.parent_id,
        is_anonymous=request.is_anonymous,
        requester=get_requester(jwt_service, auth_token),
        origin_ip=origin_ip,
        user_agent=user_agent,
    )
    return await create_comment_use_case.execute(use_case_request)


@router.get("/content/{content_id}/comments", response_model=GetThreadResponse)
async def get_thread(
    content_id: str,
    get_thread_use_case: FromDishka[GetThreadUseCase],
    jwt_service: FromDishka[JWTService],
    page: int = 1,
    page_size: int | None = None,
    sort: ThreadSort = ThreadSort.NEWEST,
    auth_token: str | None = Cookie(default=None),
) -> GetThreadResponse:
    """Get a page of top-level comments with their visible replies.

    Args:
        content_id: Content item UUID
        get_thread_use_case: Get thread use case from DI
        jwt_service: JWT service for token verification (injected)
        page: 1-based page number
        page_size: Top-level comments per page
        sort: newest, oldest or most_liked
        auth_token: JWT token from cookie (marks the caller's likes)

    Returns:
        Thread page with pagination metadata
    """
    return await get_thread_use_case.execute(
        GetThreadRequest(
            content_id=content_id,
            page=page,
            page_size=page_size,
            sort=sort,
            requester=get_requester(jwt_service, auth_token),
        )
    )


@router.get("/comments/{comment_id}/replies", response_model=GetRepliesResponse)
async def get_replies(
    comment_id: str,
    get_replies_use_case: FromDishka[GetRepliesUseCase],
    jwt_service: FromDishka[JWTService],
    page: int = 1,
    page_size: int | None = None,
    auth_token: str | None = Cookie(default=None),
) -> GetRepliesResponse:
    """Get a page of direct replies to a comment, oldest first."""
    return await get_replies_use_case.execute(
        GetRepliesRequest(
            comment_id=comment_id,
            page=page,
            page_size=page_size,
            requester=get_requester(jwt_service, auth_token),
        )
    )


@router.put("/comments/{comment_id}", response_model=EditCommentResponse)
async def edit_comment(
    comment_id: str,
    request: EditCommentAPIRequest,
    edit_comment_use_case: FromDishka[EditCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> EditCommentResponse:
    """Edit a comment's text.

    Only the author can edit, within the edit window.

    Args:
        comment_id: Comment UUID
        request: New text
        edit_comment_use_case: Edit comment use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Updated comment

    Raises:
        HTTPException: If not authenticated
    """
    requester = require_requester(jwt_service, auth_token, "edit comments")
    return await edit_comment_use_case.execute(
        EditCommentRequest(
            comment_id=comment_id,
            user_id=requester.user_id,
            text=request.text,
        )
    )


@router.delete("/comments/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: str,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    request: DeleteCommentAPIRequest | None = Body(default=None),
    auth_token: str | None = Cookie(default=None),
) -> DeleteCommentResponse:
    """Soft delete a comment.

    Authors can delete their own comments; moderators and admins can
    delete any comment and may give a reason.

    Raises:
        HTTPException: If not authenticated
    """
    requester = require_requester(jwt_service, auth_token, "delete comments")
    return await delete_comment_use_case.execute(
        DeleteCommentRequest(
            comment_id=comment_id,
            requester=requester,
            reason=request.reason if request else None,
        )
    )


@router.get("/comments/{comment_id}/history", response_model=GetEditHistoryResponse)
async def get_edit_history(
    comment_id: str,
    get_edit_history_use_case: FromDishka[GetEditHistoryUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetEditHistoryResponse:
    """Previous texts of a comment, oldest first (author or moderator)."""
    requester = require_requester(jwt_service, auth_token, "view edit history")
    return await get_edit_history_use_case.execute(
        GetEditHistoryRequest(comment_id=comment_id, requester=requester)
    )
