"""Like and flag use cases."""

from .flag_comment import FlagCommentRequest, FlagCommentResponse, FlagCommentUseCase
from .toggle_like import ToggleLikeRequest, ToggleLikeResponse, ToggleLikeUseCase

__all__ = [
    "FlagCommentRequest",
    "FlagCommentResponse",
    "FlagCommentUseCase",
    "ToggleLikeRequest",
    "ToggleLikeResponse",
    "ToggleLikeUseCase",
]
