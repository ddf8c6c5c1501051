"""Moderation use cases."""

from .hard_delete import (
    HardDeleteCommentRequest,
    HardDeleteCommentUseCase,
    HardDeleteContentCommentsRequest,
    HardDeleteContentCommentsUseCase,
    HardDeleteResponse,
)
from .list_for_review import (
    ListForReviewRequest,
    ListForReviewResponse,
    ListForReviewUseCase,
    ReviewItem,
)

__all__ = [
    "HardDeleteCommentRequest",
    "HardDeleteCommentUseCase",
    "HardDeleteContentCommentsRequest",
    "HardDeleteContentCommentsUseCase",
    "HardDeleteResponse",
    "ListForReviewRequest",
    "ListForReviewResponse",
    "ListForReviewUseCase",
    "ReviewItem",
]
