"""User domain service."""

import logfire

from fanworks.domain.repository import UserRepository
from fanworks.domain.value import Handle, Identity, UserId, UserRole


class UserService:
    """Domain service for user operations."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def resolve_identity(
        self, user_id: UserId, handle: str, role: UserRole
    ) -> Identity:
        """Build the requester identity from verified token claims.

        The stored profile wins when one exists, so renamed handles and
        revoked moderator rights take effect before the token expires.

        Args:
            user_id: User ID from the token
            handle: Handle from the token
            role: Role from the token

        Returns:
            Requester identity
        """
        with logfire.span("user_service.resolve_identity", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if user:
                return Identity(user_id=user.id, handle=user.handle, role=user.role)
            return Identity(user_id=user_id, handle=Handle(handle), role=role)
