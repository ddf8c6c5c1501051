"""Create comment use case."""

from datetime import datetime

from pydantic import BaseModel

from fanworks.application.usecase.base import (
    BaseUseCase,
    parse_reference_id,
    parse_resource_id,
)
from fanworks.application.usecase.common import (
    CommentItem,
    Requester,
    resolve_identity,
    to_comment_item,
)
from fanworks.domain.service import RateLimitService, ThreadService, UserService
from fanworks.domain.value import CommentId, ContentId


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    content_id: str  # UUID string
    text: str
    parent_id: str | None = None  # Parent comment ID for replies
    is_anonymous: bool = False  # Hide the author's handle
    requester: Requester = Requester()
    origin_ip: str | None = None
    user_agent: str | None = None


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    comment: CommentItem
    created_at: datetime


class CreateCommentUseCase(BaseUseCase):
    """Use case for commenting on a content item or replying to a comment."""

    def __init__(
        self,
        thread_service: ThreadService,
        rate_limit_service: RateLimitService,
        user_service: UserService,
    ) -> None:
        """Initialize create comment use case.

        Args:
            thread_service: Thread domain service
            rate_limit_service: Comment throttling service
            user_service: User domain service
        """
        self.thread_service = thread_service
        self.rate_limit_service = rate_limit_service
        self.user_service = user_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Steps:
        1. Resolve the caller (anonymous callers have no identity)
        2. Consume one unit of the caller's creation budget
        3. Create the comment (validates content, text, parent and depth)

        Args:
            request: Create comment request

        Returns:
            Created comment (public fields only)

        Raises:
            RateLimitExceededError: If the creation budget is exhausted
            NotFoundError: If the content item does not exist
            ValidationError: If the text or parent is invalid
        """
        content_id = ContentId(parse_resource_id(request.content_id, "Content"))
        parent_id = (
            CommentId(parse_reference_id(request.parent_id, "parent_id"))
            if request.parent_id
            else None
        )

        identity = await resolve_identity(self.user_service, request.requester)

        await self.rate_limit_service.check_comment_budget(
            origin_ip=request.origin_ip,
            user_id=identity.user_id if identity else None,
        )

        comment = await self.thread_service.create_comment(
            content_id=content_id,
            text=request.text,
            author_id=identity.user_id if identity else None,
            author_handle=identity.handle if identity else None,
            parent_id=parent_id,
            wants_anonymous=request.is_anonymous,
            origin_ip=request.origin_ip,
            user_agent=request.user_agent,
        )

        return CreateCommentResponse(
            comment=to_comment_item(comment),
            created_at=comment.created_at,
        )
