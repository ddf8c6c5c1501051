"""Get replies use case."""

from pydantic import BaseModel

from fanworks.application.usecase.base import BaseUseCase, parse_resource_id
from fanworks.application.usecase.common import (
    CommentItem,
    PageInfo,
    Requester,
    page_info,
    to_comment_item,
)
from fanworks.domain.service import InteractionService, ThreadService
from fanworks.domain.value import CommentId, UserId


class GetRepliesRequest(BaseModel):
    """Get replies request."""

    comment_id: str  # UUID string
    page: int = 1
    page_size: int | None = None
    requester: Requester = Requester()


class GetRepliesResponse(BaseModel):
    """Get replies response."""

    parent_id: str
    replies: list[CommentItem]
    pagination: PageInfo


class GetRepliesUseCase(BaseUseCase):
    """Use case for paging through the direct replies of one comment."""

    def __init__(
        self,
        thread_service: ThreadService,
        interaction_service: InteractionService,
    ) -> None:
        self.thread_service = thread_service
        self.interaction_service = interaction_service

    async def execute(self, request: GetRepliesRequest) -> GetRepliesResponse:
        """Execute get replies flow."""
        comment_id = CommentId(parse_resource_id(request.comment_id, "Comment"))

        result = await self.thread_service.get_replies(
            comment_id=comment_id,
            page=request.page,
            page_size=request.page_size,
        )

        liked: set[CommentId] = set()
        if request.requester.is_authenticated and result.items:
            liked = await self.interaction_service.get_liked_comment_ids(
                UserId(parse_resource_id(request.requester.user_id, "User")),
                [reply.id for reply in result.items],
            )

        return GetRepliesResponse(
            parent_id=str(comment_id),
            replies=[to_comment_item(r, liked=r.id in liked) for r in result.items],
            pagination=page_info(
                result.page, result.page_size, result.total, result.total_pages
            ),
        )
