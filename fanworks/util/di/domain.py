"""Domain layer DI providers."""

from dishka import Scope, provide

from fanworks.config import AuthSettings, CommentSettings, RateLimitSettings
from fanworks.domain.repository import (
    CommentRepository,
    ContentRegistry,
    EditHistoryRepository,
    FlagRepository,
    LikeRepository,
    UserRepository,
)
from fanworks.domain.service import (
    InteractionService,
    JWTService,
    ModerationService,
    RateLimiter,
    RateLimitService,
    ThreadService,
    UserService,
)
from fanworks.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_thread_service(
        self,
        comment_repository: CommentRepository,
        content_registry: ContentRegistry,
        comment_settings: CommentSettings,
    ) -> ThreadService:
        """Provide thread domain service."""
        return ThreadService(
            comment_repository=comment_repository,
            content_registry=content_registry,
            comment_settings=comment_settings,
        )

    @provide
    def get_interaction_service(
        self,
        comment_repository: CommentRepository,
        like_repository: LikeRepository,
        flag_repository: FlagRepository,
        comment_settings: CommentSettings,
    ) -> InteractionService:
        """Provide likes and flags domain service."""
        return InteractionService(
            comment_repository=comment_repository,
            like_repository=like_repository,
            flag_repository=flag_repository,
            comment_settings=comment_settings,
        )

    @provide
    def get_moderation_service(
        self,
        comment_repository: CommentRepository,
        edit_history_repository: EditHistoryRepository,
        like_repository: LikeRepository,
        flag_repository: FlagRepository,
        content_registry: ContentRegistry,
        comment_settings: CommentSettings,
    ) -> ModerationService:
        """Provide moderation domain service."""
        return ModerationService(
            comment_repository=comment_repository,
            edit_history_repository=edit_history_repository,
            like_repository=like_repository,
            flag_repository=flag_repository,
            content_registry=content_registry,
            comment_settings=comment_settings,
        )

    @provide
    def get_rate_limit_service(
        self, rate_limiter: RateLimiter, rate_limit_settings: RateLimitSettings
    ) -> RateLimitService:
        """Provide comment throttling domain service."""
        return RateLimitService(rate_limiter=rate_limiter, settings=rate_limit_settings)
