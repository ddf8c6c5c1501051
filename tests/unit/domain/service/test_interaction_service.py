"""Unit tests for InteractionService."""

import asyncio
from uuid import uuid4

import pytest

from fanworks.domain.error import (
    BusinessRuleViolationError,
    CommentInactiveError,
    NotFoundError,
    ValidationError,
)
from fanworks.domain.model import Like
from fanworks.domain.repository import CommentRepository, FlagRepository, LikeRepository
from fanworks.domain.service import InteractionService, ModerationService, ThreadService
from fanworks.domain.value import CommentId, FlagReason, UserId, UserRole
from tests.conftest import seed_content
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _posted_comment(container):
    thread_service = await container.get(ThreadService)
    content_id = await seed_content(container)
    return await thread_service.create_comment(content_id=content_id, text="Comment X")


class TestToggleLike:
    """Tests for toggle_like."""

    @pytest.mark.asyncio
    async def test_repeated_toggles_alternate(self, unit_env):
        """Like, unlike, like again: 0 -> 1 -> 0 -> 1."""
        # Arrange
        interaction_service = await unit_env.get(InteractionService)
        comment = await _posted_comment(unit_env)
        user_id = UserId(uuid4())

        # Act
        first = await interaction_service.toggle_like(comment.id, user_id)
        second = await interaction_service.toggle_like(comment.id, user_id)
        third = await interaction_service.toggle_like(comment.id, user_id)

        # Assert
        assert (first.liked, first.like_count) == (True, 1)
        assert (second.liked, second.like_count) == (False, 0)
        assert (third.liked, third.like_count) == (True, 1)

    @pytest.mark.asyncio
    async def test_like_count_matches_distinct_likers(self, unit_env):
        """Counter should equal the number of users currently liking."""
        interaction_service = await unit_env.get(InteractionService)
        comment_repo = await unit_env.get(CommentRepository)
        like_repo = await unit_env.get(LikeRepository)
        comment = await _posted_comment(unit_env)
        users = [UserId(uuid4()) for _ in range(4)]

        for user_id in users:
            await interaction_service.toggle_like(comment.id, user_id)
        await interaction_service.toggle_like(comment.id, users[0])

        stored = await comment_repo.find_by_id(comment.id)
        assert stored.like_count == 3
        assert stored.like_count == await like_repo.count_by_comment(comment.id)

    @pytest.mark.asyncio
    async def test_like_inserted_concurrently_is_not_double_counted(self, unit_env):
        """If the like row already exists, the counter is read, not bumped."""
        interaction_service = await unit_env.get(InteractionService)
        like_repo = await unit_env.get(LikeRepository)
        comment = await _posted_comment(unit_env)
        user_id = UserId(uuid4())

        # Another request inserted the row but has not bumped the counter yet
        original_remove = like_repo.remove

        async def remove_nothing(comment_id, user_id):
            return False

        like_repo.remove = remove_nothing
        await like_repo.add(Like(comment_id=comment.id, user_id=user_id))

        result = await interaction_service.toggle_like(comment.id, user_id)
        like_repo.remove = original_remove

        assert result.liked is True
        assert result.like_count == 0

    @pytest.mark.asyncio
    async def test_concurrent_duplicate_toggles_converge(self, unit_env, monkeypatch):
        """Two overlapping toggles by one user leave exactly one counted like."""
        interaction_service = await unit_env.get(InteractionService)
        comment_repo = await unit_env.get(CommentRepository)
        like_repo = await unit_env.get(LikeRepository)
        comment = await _posted_comment(unit_env)
        user_id = UserId(uuid4())

        # Both requests find nothing to remove before either one inserts
        remove = like_repo.remove

        async def remove_then_yield(comment_id, user_id):
            removed = await remove(comment_id, user_id)
            await asyncio.sleep(0)
            return removed

        monkeypatch.setattr(like_repo, "remove", remove_then_yield)

        results = await asyncio.gather(
            interaction_service.toggle_like(comment.id, user_id),
            interaction_service.toggle_like(comment.id, user_id),
        )

        stored = await comment_repo.find_by_id(comment.id)
        assert [r.liked for r in results] == [True, True]
        assert [r.like_count for r in results] == [1, 1]
        assert stored.like_count == 1
        assert stored.like_count == await like_repo.count_by_comment(comment.id)

    @pytest.mark.asyncio
    async def test_like_on_deleted_comment_is_invalid(self, unit_env):
        interaction_service = await unit_env.get(InteractionService)
        moderation_service = await unit_env.get(ModerationService)
        comment = await _posted_comment(unit_env)
        await moderation_service.soft_delete(comment.id, UserId(uuid4()), UserRole.ADMIN)

        with pytest.raises(CommentInactiveError) as exc_info:
            await interaction_service.toggle_like(comment.id, UserId(uuid4()))

        assert isinstance(exc_info.value, BusinessRuleViolationError)

    @pytest.mark.asyncio
    async def test_like_on_missing_comment_is_not_found(self, unit_env):
        interaction_service = await unit_env.get(InteractionService)

        with pytest.raises(NotFoundError):
            await interaction_service.toggle_like(CommentId(uuid4()), UserId(uuid4()))

    @pytest.mark.asyncio
    async def test_liked_comment_ids_for_user(self, unit_env):
        interaction_service = await unit_env.get(InteractionService)
        liked = await _posted_comment(unit_env)
        other = await _posted_comment(unit_env)
        user_id = UserId(uuid4())
        await interaction_service.toggle_like(liked.id, user_id)

        result = await interaction_service.get_liked_comment_ids(
            user_id, [liked.id, other.id]
        )

        assert result == {liked.id}
        assert await interaction_service.get_liked_comment_ids(user_id, []) == set()


class TestFlagComment:
    """Tests for flag_comment."""

    @pytest.mark.asyncio
    async def test_second_flag_by_same_user_is_a_no_op(self, unit_env):
        """Flagging twice keeps the count at 1 and returns the current state."""
        interaction_service = await unit_env.get(InteractionService)
        comment = await _posted_comment(unit_env)
        user_id = UserId(uuid4())

        first = await interaction_service.flag_comment(comment.id, user_id, "spam")
        second = await interaction_service.flag_comment(comment.id, user_id, "other")

        assert first.flag_count == 1
        assert second.flagged is True
        assert second.flag_count == 1

    @pytest.mark.asyncio
    async def test_concurrent_duplicate_flags_count_once(self, unit_env, monkeypatch):
        """Overlapping flags by one user are counted once."""
        interaction_service = await unit_env.get(InteractionService)
        comment_repo = await unit_env.get(CommentRepository)
        flag_repo = await unit_env.get(FlagRepository)
        comment = await _posted_comment(unit_env)
        user_id = UserId(uuid4())

        # Both requests pass validation before either one inserts
        add = flag_repo.add

        async def yield_then_add(flag):
            await asyncio.sleep(0)
            return await add(flag)

        monkeypatch.setattr(flag_repo, "add", yield_then_add)

        results = await asyncio.gather(
            interaction_service.flag_comment(comment.id, user_id, "spam"),
            interaction_service.flag_comment(comment.id, user_id, "harassment"),
        )

        stored = await comment_repo.find_by_id(comment.id)
        assert all(r.flagged for r in results)
        assert [r.flag_count for r in results] == [1, 1]
        assert stored.flag_count == 1
        assert stored.flag_count == await flag_repo.count_by_comment(comment.id)
        assert second.needs_review is False

    @pytest.mark.asyncio
    async def test_threshold_marks_comment_for_review(self, unit_env):
        """The fifth distinct flag marks the comment; it stays visible."""
        interaction_service = await unit_env.get(InteractionService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await _posted_comment(unit_env)

        results = [
            await interaction_service.flag_comment(
                comment.id, UserId(uuid4()), FlagReason.HARASSMENT
            )
            for _ in range(5)
        ]

        assert [r.needs_review for r in results] == [False] * 4 + [True]
        stored = await comment_repo.find_by_id(comment.id)
        assert stored.flag_count == 5
        assert stored.needs_review is True
        assert stored.is_active is True

    @pytest.mark.asyncio
    async def test_unknown_reason_is_invalid_input(self, unit_env):
        interaction_service = await unit_env.get(InteractionService)
        comment = await _posted_comment(unit_env)

        with pytest.raises(ValidationError):
            await interaction_service.flag_comment(
                comment.id, UserId(uuid4()), "boring"
            )

    @pytest.mark.asyncio
    async def test_flag_on_deleted_comment_is_invalid(self, unit_env):
        interaction_service = await unit_env.get(InteractionService)
        moderation_service = await unit_env.get(ModerationService)
        comment = await _posted_comment(unit_env)
        await moderation_service.soft_delete(comment.id, UserId(uuid4()), UserRole.ADMIN)

        with pytest.raises(CommentInactiveError):
            await interaction_service.flag_comment(comment.id, UserId(uuid4()), "spam")
