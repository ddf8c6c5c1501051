"""Test configuration and shared helpers."""

from uuid import uuid4

import logfire
from dishka import AsyncContainer

from fanworks.config import Settings
from fanworks.domain.model import ContentItem, User
from fanworks.domain.repository import ContentRegistry, UserRepository
from fanworks.domain.value import ContentId, Handle, UserId, UserRole
from fanworks.util.jwt import create_token

# Keep telemetry local during tests
logfire.configure(send_to_logfire=False, console=False)


async def seed_content(container: AsyncContainer, title: str = "Lantern Tide") -> ContentId:
    """Register a content item that comments can attach to."""
    registry = await container.get(ContentRegistry)
    item = await registry.save(ContentItem(id=ContentId(uuid4()), title=title))
    return item.id


async def seed_user(
    container: AsyncContainer, handle: str, role: UserRole = UserRole.USER
) -> User:
    """Store a user profile."""
    user_repository = await container.get(UserRepository)
    return await user_repository.save(
        User(id=UserId(uuid4()), handle=Handle(handle), role=role)
    )


def auth_cookie(
    user_id: UserId | None = None,
    handle: str = "reader",
    role: UserRole = UserRole.USER,
) -> dict[str, str]:
    """Cookie carrying a token signed with the configured secret."""
    token = create_token(str(user_id or uuid4()), handle, role, Settings().auth)
    return {"auth_token": token}
