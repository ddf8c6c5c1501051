"""Domain services."""

from .base import Service
from .interaction_service import (
    FlagResult,
    InteractionService,
    LikeToggleResult,
    parse_flag_reason,
)
from .jwt_service import JWTService
from .moderation_service import ModerationService, ReviewPage, collect_subtree_ids
from .rate_limit_service import RateLimitDecision, RateLimiter, RateLimitService
from .thread_service import ReplyPage, ThreadNode, ThreadPage, ThreadService
from .user_service import UserService

__all__ = [
    "FlagResult",
    "InteractionService",
    "JWTService",
    "LikeToggleResult",
    "ModerationService",
    "RateLimitDecision",
    "RateLimitService",
    "RateLimiter",
    "ReplyPage",
    "ReviewPage",
    "Service",
    "ThreadNode",
    "ThreadPage",
    "ThreadService",
    "UserService",
    "collect_subtree_ids",
    "parse_flag_reason",
]
