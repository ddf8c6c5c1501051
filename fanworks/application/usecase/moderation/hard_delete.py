"""Hard delete use cases (admin only)."""

from pydantic import BaseModel

from fanworks.application.usecase.base import BaseUseCase, parse_resource_id
from fanworks.application.usecase.common import Requester, resolve_identity
from fanworks.domain.error import NotAuthorizedError
from fanworks.domain.service import ModerationService, UserService
from fanworks.domain.value import CommentId, ContentId


class HardDeleteCommentRequest(BaseModel):
    """Hard delete comment request."""

    comment_id: str  # UUID string
    requester: Requester


class HardDeleteContentCommentsRequest(BaseModel):
    """Hard delete all comments of a content item request."""

    content_id: str  # UUID string
    requester: Requester


class HardDeleteResponse(BaseModel):
    """Hard delete response."""

    removed: int


class HardDeleteCommentUseCase(BaseUseCase):
    """Use case for physically removing a comment subtree."""

    def __init__(
        self,
        moderation_service: ModerationService,
        user_service: UserService,
    ) -> None:
        self.moderation_service = moderation_service
        self.user_service = user_service

    async def execute(self, request: HardDeleteCommentRequest) -> HardDeleteResponse:
        """Execute hard delete flow.

        Raises:
            NotAuthorizedError: If the caller is not an admin
            NotFoundError: If the comment does not exist
        """
        comment_id = CommentId(parse_resource_id(request.comment_id, "Comment"))
        identity = await resolve_identity(self.user_service, request.requester)
        if identity is None:
            raise NotAuthorizedError("hard delete", "comment", str(comment_id))

        removed = await self.moderation_service.hard_delete_comment(
            comment_id=comment_id, requester_role=identity.role
        )
        return HardDeleteResponse(removed=removed)


class HardDeleteContentCommentsUseCase(BaseUseCase):
    """Use case for physically removing every comment of a content item."""

    def __init__(
        self,
        moderation_service: ModerationService,
        user_service: UserService,
    ) -> None:
        self.moderation_service = moderation_service
        self.user_service = user_service

    async def execute(
        self, request: HardDeleteContentCommentsRequest
    ) -> HardDeleteResponse:
        """Execute content purge flow.

        Raises:
            NotAuthorizedError: If the caller is not an admin
            NotFoundError: If the content item does not exist
        """
        content_id = ContentId(parse_resource_id(request.content_id, "Content"))
        identity = await resolve_identity(self.user_service, request.requester)
        if identity is None:
            raise NotAuthorizedError(
                "hard delete comments of", "content", str(content_id)
            )

        removed = await self.moderation_service.hard_delete_content(
            content_id=content_id, requester_role=identity.role
        )
        return HardDeleteResponse(removed=removed)
