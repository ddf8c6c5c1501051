"""Application layer DI providers."""

from dishka import Scope, provide

from fanworks.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    EditCommentUseCase,
    GetEditHistoryUseCase,
    GetRepliesUseCase,
    GetThreadUseCase,
)
from fanworks.application.usecase.interaction import (
    FlagCommentUseCase,
    ToggleLikeUseCase,
)
from fanworks.application.usecase.moderation import (
    HardDeleteCommentUseCase,
    HardDeleteContentCommentsUseCase,
    ListForReviewUseCase,
)
from fanworks.domain.service import (
    InteractionService,
    ModerationService,
    RateLimitService,
    ThreadService,
    UserService,
)
from fanworks.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Thread use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self,
        thread_service: ThreadService,
        rate_limit_service: RateLimitService,
        user_service: UserService,
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            thread_service=thread_service,
            rate_limit_service=rate_limit_service,
            user_service=user_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_thread_use_case(
        self,
        thread_service: ThreadService,
        interaction_service: InteractionService,
    ) -> GetThreadUseCase:
        """Provide get thread use case."""
        return GetThreadUseCase(
            thread_service=thread_service,
            interaction_service=interaction_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_replies_use_case(
        self,
        thread_service: ThreadService,
        interaction_service: InteractionService,
    ) -> GetRepliesUseCase:
        """Provide get replies use case."""
        return GetRepliesUseCase(
            thread_service=thread_service,
            interaction_service=interaction_service,
        )

    # Edit and delete use cases
    @provide(scope=Scope.REQUEST)
    def get_edit_comment_use_case(
        self, moderation_service: ModerationService
    ) -> EditCommentUseCase:
        """Provide edit comment use case."""
        return EditCommentUseCase(moderation_service=moderation_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, moderation_service: ModerationService, user_service: UserService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(
            moderation_service=moderation_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_get_edit_history_use_case(
        self, moderation_service: ModerationService, user_service: UserService
    ) -> GetEditHistoryUseCase:
        """Provide get edit history use case."""
        return GetEditHistoryUseCase(
            moderation_service=moderation_service, user_service=user_service
        )

    # Interaction use cases
    @provide(scope=Scope.REQUEST)
    def get_toggle_like_use_case(
        self, interaction_service: InteractionService
    ) -> ToggleLikeUseCase:
        """Provide toggle like use case."""
        return ToggleLikeUseCase(interaction_service=interaction_service)

    @provide(scope=Scope.REQUEST)
    def get_flag_comment_use_case(
        self, interaction_service: InteractionService
    ) -> FlagCommentUseCase:
        """Provide flag comment use case."""
        return FlagCommentUseCase(interaction_service=interaction_service)

    # Admin use cases
    @provide(scope=Scope.REQUEST)
    def get_hard_delete_comment_use_case(
        self, moderation_service: ModerationService, user_service: UserService
    ) -> HardDeleteCommentUseCase:
        """Provide hard delete comment use case."""
        return HardDeleteCommentUseCase(
            moderation_service=moderation_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_hard_delete_content_comments_use_case(
        self, moderation_service: ModerationService, user_service: UserService
    ) -> HardDeleteContentCommentsUseCase:
        """Provide content purge use case."""
        return HardDeleteContentCommentsUseCase(
            moderation_service=moderation_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_list_for_review_use_case(
        self, moderation_service: ModerationService, user_service: UserService
    ) -> ListForReviewUseCase:
        """Provide review listing use case."""
        return ListForReviewUseCase(
            moderation_service=moderation_service, user_service=user_service
        )
