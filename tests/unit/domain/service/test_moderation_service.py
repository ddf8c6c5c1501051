"""Unit tests for ModerationService."""

from datetime import timedelta
from uuid import uuid4

import pytest

from fanworks.domain.error import (
    CommentInactiveError,
    EditWindowExpiredError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from fanworks.domain.model import Comment, utcnow
from fanworks.domain.repository import (
    CommentRepository,
    ContentRegistry,
    EditHistoryRepository,
    FlagRepository,
    LikeRepository,
)
from fanworks.domain.service import (
    InteractionService,
    ModerationService,
    ThreadService,
    collect_subtree_ids,
)
from fanworks.domain.value import CommentId, ContentId, Handle, UserId, UserRole
from tests.conftest import seed_content
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _authored(container, content_id, text="Original", parent_id=None):
    thread_service = await container.get(ThreadService)
    author_id = UserId(uuid4())
    comment = await thread_service.create_comment(
        content_id=content_id,
        text=text,
        author_id=author_id,
        author_handle=Handle("inkwell"),
        parent_id=parent_id,
    )
    return comment, author_id


async def _posted_at(container, age: timedelta) -> Comment:
    comment_repo = await container.get(CommentRepository)
    content_id = await seed_content(container)
    created_at = utcnow() - age
    return await comment_repo.save(
        Comment(
            id=CommentId(uuid4()),
            content_id=content_id,
            author_id=UserId(uuid4()),
            display_name="inkwell",
            text="Written a while ago",
            created_at=created_at,
            updated_at=created_at,
        )
    )


class TestEditComment:
    """Tests for edit_comment."""

    @pytest.mark.asyncio
    async def test_edit_updates_text_and_marks_edited(self, unit_env):
        # Arrange
        moderation_service = await unit_env.get(ModerationService)
        content_id = await seed_content(unit_env)
        comment, author_id = await _authored(unit_env, content_id)

        # Act
        updated = await moderation_service.edit_comment(
            comment.id, author_id, "  Fixed a typo  "
        )

        # Assert
        assert updated.text == "Fixed a typo"
        assert updated.is_edited is True
        assert updated.last_edited_at is not None

    @pytest.mark.asyncio
    async def test_history_reconstructs_every_previous_text(self, unit_env):
        """Each edit appends the text it replaced, oldest first."""
        moderation_service = await unit_env.get(ModerationService)
        content_id = await seed_content(unit_env)
        comment, author_id = await _authored(unit_env, content_id, "v1")

        await moderation_service.edit_comment(comment.id, author_id, "v2")
        current = await moderation_service.edit_comment(comment.id, author_id, "v3")
        history = await moderation_service.get_edit_history(
            comment.id, author_id, UserRole.USER
        )

        assert [entry.previous_text for entry in history] == ["v1", "v2"]
        assert all(entry.edited_by == author_id for entry in history)
        assert current.text == "v3"

    @pytest.mark.asyncio
    async def test_edit_by_other_user_is_forbidden(self, unit_env):
        moderation_service = await unit_env.get(ModerationService)
        content_id = await seed_content(unit_env)
        comment, _ = await _authored(unit_env, content_id)

        with pytest.raises(NotAuthorizedError):
            await moderation_service.edit_comment(comment.id, UserId(uuid4()), "Mine now")

    @pytest.mark.asyncio
    async def test_anonymous_comment_cannot_be_edited_by_anyone(self, unit_env):
        """Anonymous comments have no owner, so every edit is forbidden."""
        thread_service = await unit_env.get(ThreadService)
        moderation_service = await unit_env.get(ModerationService)
        content_id = await seed_content(unit_env)
        comment = await thread_service.create_comment(
            content_id=content_id, text="Anonymous praise"
        )

        with pytest.raises(NotAuthorizedError):
            await moderation_service.edit_comment(comment.id, UserId(uuid4()), "Edited")

    @pytest.mark.asyncio
    async def test_edit_after_window_is_invalid(self, unit_env):
        """24 hours and one second after posting the window is closed."""
        moderation_service = await unit_env.get(ModerationService)
        comment = await _posted_at(unit_env, timedelta(hours=24, seconds=1))

        with pytest.raises(EditWindowExpiredError):
            await moderation_service.edit_comment(comment.id, comment.author_id, "Late")

    @pytest.mark.asyncio
    async def test_edit_just_inside_window_succeeds(self, unit_env):
        """23 hours 59 minutes 59 seconds after posting the edit is allowed."""
        moderation_service = await unit_env.get(ModerationService)
        comment = await _posted_at(unit_env, timedelta(hours=23, minutes=59, seconds=59))

        updated = await moderation_service.edit_comment(
            comment.id, comment.author_id, "Just in time"
        )

        assert updated.text == "Just in time"

    @pytest.mark.asyncio
    async def test_edit_of_deleted_comment_is_invalid(self, unit_env):
        moderation_service = await unit_env.get(ModerationService)
        content_id = await seed_content(unit_env)
        comment, author_id = await _authored(unit_env, content_id)
        await moderation_service.soft_delete(comment.id, author_id, UserRole.USER)

        with pytest.raises(CommentInactiveError):
            await moderation_service.edit_comment(comment.id, author_id, "Back")

    @pytest.mark.asyncio
    async def test_edit_with_empty_text_is_invalid_input(self, unit_env):
        moderation_service = await unit_env.get(ModerationService)
        history_repo = await unit_env.get(EditHistoryRepository)
        content_id = await seed_content(unit_env)
        comment, author_id = await _authored(unit_env, content_id)

        with pytest.raises(ValidationError):
            await moderation_service.edit_comment(comment.id, author_id, "   ")

        assert await history_repo.find_by_comment(comment.id) == []

    @pytest.mark.asyncio
    async def test_edit_of_missing_comment_is_not_found(self, unit_env):
        moderation_service = await unit_env.get(ModerationService)

        with pytest.raises(NotFoundError):
            await moderation_service.edit_comment(
                CommentId(uuid4()), UserId(uuid4()), "Nothing"
            )


class TestSoftDelete:
    """Tests for soft_delete."""

    @pytest.mark.asyncio
    async def test_author_can_delete_own_comment(self, unit_env):
        moderation_service = await unit_env.get(ModerationService)
        content_id = await seed_content(unit_env)
        comment, author_id = await _authored(unit_env, content_id)

        deleted = await moderation_service.soft_delete(
            comment.id, author_id, UserRole.USER
        )

        assert deleted.is_active is False
        assert deleted.text == "[deleted]"
        assert deleted.deleted_by == author_id
        assert deleted.deleted_at is not None

    @pytest.mark.asyncio
    async def test_moderator_can_delete_with_reason(self, unit_env):
        moderation_service = await unit_env.get(ModerationService)
        content_id = await seed_content(unit_env)
        comment, _ = await _authored(unit_env, content_id)
        moderator_id = UserId(uuid4())

        deleted = await moderation_service.soft_delete(
            comment.id, moderator_id, UserRole.MODERATOR, reason="Spoilers untagged"
        )

        assert deleted.deleted_by == moderator_id
        assert deleted.deletion_reason == "Spoilers untagged"

    @pytest.mark.asyncio
    async def test_other_user_cannot_delete(self, unit_env):
        moderation_service = await unit_env.get(ModerationService)
        content_id = await seed_content(unit_env)
        comment, _ = await _authored(unit_env, content_id)

        with pytest.raises(NotAuthorizedError):
            await moderation_service.soft_delete(
                comment.id, UserId(uuid4()), UserRole.USER
            )

    @pytest.mark.asyncio
    async def test_second_delete_is_invalid(self, unit_env):
        moderation_service = await unit_env.get(ModerationService)
        content_id = await seed_content(unit_env)
        comment, author_id = await _authored(unit_env, content_id)
        await moderation_service.soft_delete(comment.id, author_id, UserRole.USER)

        with pytest.raises(CommentInactiveError):
            await moderation_service.soft_delete(comment.id, author_id, UserRole.USER)

    @pytest.mark.asyncio
    async def test_children_are_unaffected(self, unit_env):
        """Soft delete touches only the comment itself."""
        moderation_service = await unit_env.get(ModerationService)
        comment_repo = await unit_env.get(CommentRepository)
        content_id = await seed_content(unit_env)
        parent, author_id = await _authored(unit_env, content_id, "Parent")
        child, _ = await _authored(unit_env, content_id, "Child", parent.id)

        await moderation_service.soft_delete(parent.id, author_id, UserRole.USER)

        stored_child = await comment_repo.find_by_id(child.id)
        assert stored_child == child


class TestHardDelete:
    """Tests for hard_delete_comment and hard_delete_content."""

    @pytest.mark.asyncio
    async def test_hard_delete_removes_whole_subtree(self, unit_env):
        moderation_service = await unit_env.get(ModerationService)
        interaction_service = await unit_env.get(InteractionService)
        comment_repo = await unit_env.get(CommentRepository)
        like_repo = await unit_env.get(LikeRepository)
        flag_repo = await unit_env.get(FlagRepository)
        registry = await unit_env.get(ContentRegistry)
        content_id = await seed_content(unit_env)
        root, _ = await _authored(unit_env, content_id, "Root")
        reply, _ = await _authored(unit_env, content_id, "Reply", root.id)
        nested, _ = await _authored(unit_env, content_id, "Nested", reply.id)
        sibling, _ = await _authored(unit_env, content_id, "Sibling")
        await interaction_service.toggle_like(nested.id, UserId(uuid4()))
        await interaction_service.flag_comment(reply.id, UserId(uuid4()), "spam")

        removed = await moderation_service.hard_delete_comment(root.id, UserRole.ADMIN)

        assert removed == 3
        for comment_id in (root.id, reply.id, nested.id):
            assert await comment_repo.find_by_id(comment_id) is None
        assert await comment_repo.find_by_id(sibling.id) is not None
        assert await like_repo.count_by_comment(nested.id) == 0
        assert await flag_repo.count_by_comment(reply.id) == 0
        assert (await registry.find_by_id(content_id)).comment_count == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("role", [UserRole.USER, UserRole.MODERATOR])
    async def test_hard_delete_requires_admin(self, unit_env, role):
        moderation_service = await unit_env.get(ModerationService)
        content_id = await seed_content(unit_env)
        comment, _ = await _authored(unit_env, content_id)

        with pytest.raises(NotAuthorizedError):
            await moderation_service.hard_delete_comment(comment.id, role)

    @pytest.mark.asyncio
    async def test_hard_delete_of_missing_comment_is_not_found(self, unit_env):
        moderation_service = await unit_env.get(ModerationService)

        with pytest.raises(NotFoundError):
            await moderation_service.hard_delete_comment(
                CommentId(uuid4()), UserRole.ADMIN
            )

    @pytest.mark.asyncio
    async def test_hard_delete_content_removes_every_comment(self, unit_env):
        moderation_service = await unit_env.get(ModerationService)
        comment_repo = await unit_env.get(CommentRepository)
        registry = await unit_env.get(ContentRegistry)
        content_id = await seed_content(unit_env)
        other_content = await seed_content(unit_env, "Other")
        root, _ = await _authored(unit_env, content_id)
        await _authored(unit_env, content_id, "Reply", root.id)
        survivor, _ = await _authored(unit_env, other_content)

        removed = await moderation_service.hard_delete_content(
            content_id, UserRole.ADMIN
        )

        assert removed == 2
        assert await comment_repo.find_by_content(content_id) == []
        assert await comment_repo.find_by_id(survivor.id) is not None
        assert (await registry.find_by_id(content_id)).comment_count == 0

    @pytest.mark.asyncio
    async def test_hard_delete_of_missing_content_is_not_found(self, unit_env):
        moderation_service = await unit_env.get(ModerationService)

        with pytest.raises(NotFoundError):
            await moderation_service.hard_delete_content(
                ContentId(uuid4()), UserRole.ADMIN
            )


class TestEditHistoryAccess:
    """Tests for get_edit_history."""

    @pytest.mark.asyncio
    async def test_moderator_can_read_history(self, unit_env):
        moderation_service = await unit_env.get(ModerationService)
        content_id = await seed_content(unit_env)
        comment, author_id = await _authored(unit_env, content_id, "Before")
        await moderation_service.edit_comment(comment.id, author_id, "After")

        history = await moderation_service.get_edit_history(
            comment.id, UserId(uuid4()), UserRole.MODERATOR
        )

        assert [entry.previous_text for entry in history] == ["Before"]

    @pytest.mark.asyncio
    async def test_other_user_cannot_read_history(self, unit_env):
        moderation_service = await unit_env.get(ModerationService)
        content_id = await seed_content(unit_env)
        comment, _ = await _authored(unit_env, content_id)

        with pytest.raises(NotAuthorizedError):
            await moderation_service.get_edit_history(
                comment.id, UserId(uuid4()), UserRole.USER
            )


class TestListForReview:
    """Tests for list_for_review."""

    @pytest.mark.asyncio
    async def test_needs_review_filter(self, unit_env):
        moderation_service = await unit_env.get(ModerationService)
        interaction_service = await unit_env.get(InteractionService)
        content_id = await seed_content(unit_env)
        flagged, _ = await _authored(unit_env, content_id, "Buy followers here")
        await _authored(unit_env, content_id, "Nice shading")
        for _ in range(5):
            await interaction_service.flag_comment(flagged.id, UserId(uuid4()), "spam")

        page = await moderation_service.list_for_review(
            UserRole.MODERATOR, needs_review_only=True
        )

        assert page.total == 1
        assert [c.id for c in page.items] == [flagged.id]

    @pytest.mark.asyncio
    async def test_search_and_inactive_filters(self, unit_env):
        moderation_service = await unit_env.get(ModerationService)
        content_id = await seed_content(unit_env)
        kept, _ = await _authored(unit_env, content_id, "The DRAGON arc rules")
        deleted, author_id = await _authored(unit_env, content_id, "dragon spoilers")
        await moderation_service.soft_delete(deleted.id, author_id, UserRole.USER)

        everything = await moderation_service.list_for_review(
            UserRole.ADMIN, search="dragon"
        )
        active_only = await moderation_service.list_for_review(
            UserRole.ADMIN, search="dragon", include_inactive=False
        )

        assert everything.total == 1  # the deleted text is now the placeholder
        assert [c.id for c in active_only.items] == [kept.id]

    @pytest.mark.asyncio
    async def test_regular_user_cannot_list(self, unit_env):
        moderation_service = await unit_env.get(ModerationService)

        with pytest.raises(NotAuthorizedError):
            await moderation_service.list_for_review(UserRole.USER)


class TestCollectSubtreeIds:
    """Tests for collect_subtree_ids."""

    def _comment(self, parent_id=None, depth=0):
        return Comment(
            id=CommentId(uuid4()),
            content_id=ContentId(uuid4()),
            parent_id=parent_id,
            depth=depth,
            display_name="inkwell",
            text="text",
        )

    def test_collects_root_and_descendants_only(self):
        root = self._comment()
        child = self._comment(root.id, 1)
        grandchild = self._comment(child.id, 2)
        stranger = self._comment()
        stranger_child = self._comment(stranger.id, 1)

        ids = collect_subtree_ids(root.id, [stranger_child, grandchild, root, child, stranger])

        assert ids[0] == root.id
        assert set(ids) == {root.id, child.id, grandchild.id}

    def test_leaf_collects_itself(self):
        leaf = self._comment()

        assert collect_subtree_ids(leaf.id, [leaf]) == [leaf.id]
