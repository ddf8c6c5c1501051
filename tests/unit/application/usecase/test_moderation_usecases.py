"""Unit tests for moderation use cases."""

from uuid import uuid4

import pytest

from fanworks.application.usecase.comment import CreateCommentRequest, CreateCommentUseCase
from fanworks.application.usecase.common import Requester
from fanworks.application.usecase.moderation import (
    HardDeleteCommentRequest,
    HardDeleteCommentUseCase,
    HardDeleteContentCommentsRequest,
    HardDeleteContentCommentsUseCase,
    ListForReviewRequest,
    ListForReviewUseCase,
)
from fanworks.domain.error import NotAuthorizedError, NotFoundError
from fanworks.domain.value import UserRole
from tests.conftest import seed_content, seed_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


def _staff(role: UserRole, user_id=None) -> Requester:
    return Requester(user_id=str(user_id or uuid4()), handle="staff", role=role)


async def _create(container, content_id, text, parent_id=None):
    use_case = await container.get(CreateCommentUseCase)
    response = await use_case.execute(
        CreateCommentRequest(
            content_id=str(content_id),
            text=text,
            parent_id=parent_id,
            origin_ip="192.0.2.33",
            user_agent="Fanreader/2.1",
        )
    )
    return response.comment


class TestListForReviewUseCase:
    """Tests for ListForReviewUseCase."""

    @pytest.mark.asyncio
    async def test_review_items_include_forensics(self, unit_env):
        # Arrange
        content_id = await seed_content(unit_env)
        comment = await _create(unit_env, content_id, "Suspicious link")
        use_case = await unit_env.get(ListForReviewUseCase)

        # Act
        response = await use_case.execute(
            ListForReviewRequest(requester=_staff(UserRole.MODERATOR))
        )

        # Assert
        [item] = response.comments
        assert item.comment_id == comment.comment_id
        assert item.origin_ip == "192.0.2.33"
        assert item.user_agent == "Fanreader/2.1"
        assert item.flag_count == 0
        assert response.pagination.total == 1

    @pytest.mark.asyncio
    async def test_anonymous_and_regular_users_are_forbidden(self, unit_env):
        use_case = await unit_env.get(ListForReviewUseCase)

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(ListForReviewRequest(requester=Requester()))
        with pytest.raises(NotAuthorizedError):
            await use_case.execute(ListForReviewRequest(requester=_staff(UserRole.USER)))


class TestHardDeleteUseCases:
    """Tests for the hard delete use cases."""

    @pytest.mark.asyncio
    async def test_admin_removes_subtree(self, unit_env):
        content_id = await seed_content(unit_env)
        root = await _create(unit_env, content_id, "Root")
        await _create(unit_env, content_id, "Reply", root.comment_id)
        use_case = await unit_env.get(HardDeleteCommentUseCase)

        response = await use_case.execute(
            HardDeleteCommentRequest(
                comment_id=root.comment_id, requester=_staff(UserRole.ADMIN)
            )
        )

        assert response.removed == 2

    @pytest.mark.asyncio
    async def test_moderator_cannot_hard_delete(self, unit_env):
        content_id = await seed_content(unit_env)
        root = await _create(unit_env, content_id, "Root")
        use_case = await unit_env.get(HardDeleteCommentUseCase)

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                HardDeleteCommentRequest(
                    comment_id=root.comment_id, requester=_staff(UserRole.MODERATOR)
                )
            )

    @pytest.mark.asyncio
    async def test_stored_admin_role_is_honoured(self, unit_env):
        """A user promoted after their token was issued can purge content."""
        content_id = await seed_content(unit_env)
        await _create(unit_env, content_id, "One")
        await _create(unit_env, content_id, "Two")
        admin = await seed_user(unit_env, "head_admin", UserRole.ADMIN)
        use_case = await unit_env.get(HardDeleteContentCommentsUseCase)

        response = await use_case.execute(
            HardDeleteContentCommentsRequest(
                content_id=str(content_id),
                requester=_staff(UserRole.USER, user_id=admin.id),
            )
        )

        assert response.removed == 2

    @pytest.mark.asyncio
    async def test_unknown_content_is_not_found(self, unit_env):
        use_case = await unit_env.get(HardDeleteContentCommentsUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                HardDeleteContentCommentsRequest(
                    content_id=str(uuid4()), requester=_staff(UserRole.ADMIN)
                )
            )
