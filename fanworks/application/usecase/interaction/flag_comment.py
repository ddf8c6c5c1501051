"""Flag comment use case."""

from pydantic import BaseModel

from fanworks.application.usecase.base import BaseUseCase, parse_resource_id
from fanworks.domain.service import InteractionService
from fanworks.domain.value import CommentId, UserId


class FlagCommentRequest(BaseModel):
    """Flag comment request."""

    comment_id: str  # UUID string
    user_id: str  # User ID from authenticated user
    reason: str  # spam | harassment | inappropriate | other


class FlagCommentResponse(BaseModel):
    """Flag comment response."""

    comment_id: str
    flagged: bool
    flag_count: int
    needs_review: bool


class FlagCommentUseCase(BaseUseCase):
    """Use case for reporting a comment to moderators."""

    def __init__(self, interaction_service: InteractionService) -> None:
        """Initialize flag comment use case.

        Args:
            interaction_service: Interaction domain service
        """
        self.interaction_service = interaction_service

    async def execute(self, request: FlagCommentRequest) -> FlagCommentResponse:
        """Execute flag comment flow.

        Raises:
            ValidationError: If the reason is not allowed
            NotFoundError: If the comment does not exist
            CommentInactiveError: If the comment was deleted
        """
        comment_id = CommentId(parse_resource_id(request.comment_id, "Comment"))
        result = await self.interaction_service.flag_comment(
            comment_id=comment_id,
            user_id=UserId(parse_resource_id(request.user_id, "User")),
            reason=request.reason,
        )
        return FlagCommentResponse(
            comment_id=str(comment_id),
            flagged=result.flagged,
            flag_count=result.flag_count,
            needs_review=result.needs_review,
        )
