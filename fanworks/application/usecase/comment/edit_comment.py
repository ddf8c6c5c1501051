"""Edit comment use case."""

from pydantic import BaseModel

from fanworks.application.usecase.base import BaseUseCase, parse_resource_id
from fanworks.application.usecase.common import CommentItem, to_comment_item
from fanworks.domain.service import ModerationService
from fanworks.domain.value import CommentId, UserId


class EditCommentRequest(BaseModel):
    """Edit comment request."""

    comment_id: str  # UUID string
    user_id: str  # User ID from authenticated user
    text: str


class EditCommentResponse(BaseModel):
    """Edit comment response."""

    comment: CommentItem


class EditCommentUseCase(BaseUseCase):
    """Use case for editing a comment's text.

    Only the author can edit, within the edit window.
    """

    def __init__(self, moderation_service: ModerationService) -> None:
        """Initialize edit comment use case.

        Args:
            moderation_service: Moderation domain service
        """
        self.moderation_service = moderation_service

    async def execute(self, request: EditCommentRequest) -> EditCommentResponse:
        """Execute edit comment flow.

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the user is not the author
            BusinessRuleViolationError: If deleted or outside the edit window
            ValidationError: If the new text is invalid
        """
        comment = await self.moderation_service.edit_comment(
            comment_id=CommentId(parse_resource_id(request.comment_id, "Comment")),
            requester_id=UserId(parse_resource_id(request.user_id, "User")),
            new_text=request.text,
        )
        return EditCommentResponse(comment=to_comment_item(comment))
