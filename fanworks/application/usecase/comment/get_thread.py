"""Get thread use case."""

from pydantic import BaseModel

from fanworks.application.usecase.base import BaseUseCase, parse_resource_id
from fanworks.application.usecase.common import (
    PageInfo,
    Requester,
    ThreadItem,
    page_info,
    to_thread_item,
)
from fanworks.domain.service import InteractionService, ThreadNode, ThreadService
from fanworks.domain.value import CommentId, ContentId, ThreadSort, UserId


class GetThreadRequest(BaseModel):
    """Get thread request."""

    content_id: str  # UUID string
    page: int = 1
    page_size: int | None = None
    sort: ThreadSort = ThreadSort.NEWEST
    requester: Requester = Requester()


class GetThreadResponse(BaseModel):
    """Get thread response."""

    content_id: str
    comments: list[ThreadItem]
    pagination: PageInfo


class GetThreadUseCase(BaseUseCase):
    """Use case for reading one page of a content item's comment thread."""

    def __init__(
        self,
        thread_service: ThreadService,
        interaction_service: InteractionService,
    ) -> None:
        """Initialize get thread use case.

        Args:
            thread_service: Thread domain service
            interaction_service: Interaction service for the caller's likes
        """
        self.thread_service = thread_service
        self.interaction_service = interaction_service

    async def execute(self, request: GetThreadRequest) -> GetThreadResponse:
        """Execute get thread flow.

        If the caller is authenticated, each comment carries whether the
        caller likes it.

        Args:
            request: Get thread request

        Returns:
            Top-level comments with nested replies and pagination metadata
        """
        content_id = ContentId(parse_resource_id(request.content_id, "Content"))

        thread = await self.thread_service.get_thread(
            content_id=content_id,
            page=request.page,
            page_size=request.page_size,
            sort=request.sort,
        )

        liked: set[CommentId] = set()
        if request.requester.is_authenticated:
            # Batch query for all comments on the page
            comment_ids = _collect_ids(thread.items)
            liked = await self.interaction_service.get_liked_comment_ids(
                UserId(parse_resource_id(request.requester.user_id, "User")),
                comment_ids,
            )

        return GetThreadResponse(
            content_id=str(content_id),
            comments=[_to_item(node, liked) for node in thread.items],
            pagination=page_info(
                thread.page, thread.page_size, thread.total, thread.total_pages
            ),
        )


def _collect_ids(nodes: list[ThreadNode]) -> list[CommentId]:
    ids = []
    for node in nodes:
        ids.append(node.comment.id)
        ids.extend(_collect_ids(node.replies))
    return ids


def _to_item(node: ThreadNode, liked: set[CommentId]) -> ThreadItem:
    return to_thread_item(
        node.comment,
        replies=[_to_item(reply, liked) for reply in node.replies],
        liked=node.comment.id in liked,
    )
