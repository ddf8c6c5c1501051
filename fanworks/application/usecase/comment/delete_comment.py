"""Delete (soft) comment use case."""

from datetime import datetime

from pydantic import BaseModel

from fanworks.application.usecase.base import BaseUseCase, parse_resource_id
from fanworks.application.usecase.common import Requester, resolve_identity
from fanworks.domain.error import NotAuthorizedError
from fanworks.domain.service import ModerationService, UserService
from fanworks.domain.value import CommentId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str  # UUID string
    requester: Requester
    reason: str | None = None  # Moderator note


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    comment_id: str
    is_active: bool
    deleted_at: datetime | None
    deleted_by_moderator: bool


class DeleteCommentUseCase(BaseUseCase):
    """Use case for soft deleting a comment (author or moderator)."""

    def __init__(
        self,
        moderation_service: ModerationService,
        user_service: UserService,
    ) -> None:
        """Initialize delete comment use case.

        Args:
            moderation_service: Moderation domain service
            user_service: User service for resolving the caller's role
        """
        self.moderation_service = moderation_service
        self.user_service = user_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Raises:
            NotFoundError: If the comment does not exist
            CommentInactiveError: If the comment was already deleted
            NotAuthorizedError: If the caller is neither author nor moderator
        """
        comment_id = CommentId(parse_resource_id(request.comment_id, "Comment"))
        identity = await resolve_identity(self.user_service, request.requester)
        if identity is None:
            raise NotAuthorizedError("delete", "comment", str(comment_id))

        comment = await self.moderation_service.soft_delete(
            comment_id=comment_id,
            requester_id=identity.user_id,
            requester_role=identity.role,
            reason=request.reason,
        )
        return DeleteCommentResponse(
            comment_id=str(comment.id),
            is_active=comment.is_active,
            deleted_at=comment.deleted_at,
            deleted_by_moderator=not comment.is_authored_by(identity.user_id),
        )
