"""Toggle like use case."""

from pydantic import BaseModel

from fanworks.application.usecase.base import BaseUseCase, parse_resource_id
from fanworks.domain.service import InteractionService
from fanworks.domain.value import CommentId, UserId


class ToggleLikeRequest(BaseModel):
    """Toggle like request."""

    comment_id: str  # UUID string
    user_id: str  # User ID from authenticated user


class ToggleLikeResponse(BaseModel):
    """Toggle like response."""

    comment_id: str
    liked: bool
    like_count: int


class ToggleLikeUseCase(BaseUseCase):
    """Use case for liking or unliking a comment."""

    def __init__(self, interaction_service: InteractionService) -> None:
        """Initialize toggle like use case.

        Args:
            interaction_service: Interaction domain service
        """
        self.interaction_service = interaction_service

    async def execute(self, request: ToggleLikeRequest) -> ToggleLikeResponse:
        """Execute toggle like flow.

        Raises:
            NotFoundError: If the comment does not exist
            CommentInactiveError: If the comment was deleted
        """
        comment_id = CommentId(parse_resource_id(request.comment_id, "Comment"))
        result = await self.interaction_service.toggle_like(
            comment_id=comment_id,
            user_id=UserId(parse_resource_id(request.user_id, "User")),
        )
        return ToggleLikeResponse(
            comment_id=str(comment_id),
            liked=result.liked,
            like_count=result.like_count,
        )
