"""Get edit history use case."""

from datetime import datetime

from pydantic import BaseModel

from fanworks.application.usecase.base import BaseUseCase, parse_resource_id
from fanworks.application.usecase.common import Requester, resolve_identity
from fanworks.domain.error import NotAuthorizedError
from fanworks.domain.service import ModerationService, UserService
from fanworks.domain.value import CommentId


class EditHistoryItem(BaseModel):
    """One previous version of a comment."""

    previous_text: str
    edited_by: str
    edited_at: datetime


class GetEditHistoryRequest(BaseModel):
    """Get edit history request."""

    comment_id: str  # UUID string
    requester: Requester


class GetEditHistoryResponse(BaseModel):
    """Get edit history response."""

    comment_id: str
    history: list[EditHistoryItem]


class GetEditHistoryUseCase(BaseUseCase):
    """Use case for reading a comment's previous texts (author or moderator)."""

    def __init__(
        self,
        moderation_service: ModerationService,
        user_service: UserService,
    ) -> None:
        self.moderation_service = moderation_service
        self.user_service = user_service

    async def execute(self, request: GetEditHistoryRequest) -> GetEditHistoryResponse:
        """Execute get edit history flow, oldest edit first."""
        comment_id = CommentId(parse_resource_id(request.comment_id, "Comment"))
        identity = await resolve_identity(self.user_service, request.requester)
        if identity is None:
            raise NotAuthorizedError("view history of", "comment", str(comment_id))

        entries = await self.moderation_service.get_edit_history(
            comment_id=comment_id,
            requester_id=identity.user_id,
            requester_role=identity.role,
        )
        return GetEditHistoryResponse(
            comment_id=str(comment_id),
            history=[
                EditHistoryItem(
                    previous_text=entry.previous_text,
                    edited_by=str(entry.edited_by),
                    edited_at=entry.edited_at,
                )
                for entry in entries
            ],
        )
