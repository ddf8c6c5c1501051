"""Unit tests for comment use cases."""

from uuid import uuid4

import pytest

from fanworks.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentUseCase,
    EditCommentRequest,
    EditCommentUseCase,
    GetEditHistoryRequest,
    GetEditHistoryUseCase,
    GetRepliesRequest,
    GetRepliesUseCase,
    GetThreadRequest,
    GetThreadUseCase,
)
from fanworks.application.usecase.common import Requester
from fanworks.application.usecase.interaction import (
    FlagCommentRequest,
    FlagCommentUseCase,
    ToggleLikeRequest,
    ToggleLikeUseCase,
)
from fanworks.domain.error import (
    NestingTooDeepError,
    NotAuthorizedError,
    NotFoundError,
    RateLimitExceededError,
    ValidationError,
)
from fanworks.domain.value import UserRole
from tests.conftest import seed_content, seed_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


def _requester(user_id=None, handle="u1", role=UserRole.USER) -> Requester:
    return Requester(user_id=str(user_id or uuid4()), handle=handle, role=role)


async def _create(container, content_id, text, requester=None, parent_id=None, ip="203.0.113.9"):
    use_case = await container.get(CreateCommentUseCase)
    response = await use_case.execute(
        CreateCommentRequest(
            content_id=str(content_id),
            text=text,
            parent_id=parent_id,
            requester=requester or Requester(),
            origin_ip=ip,
            user_agent="pytest",
        )
    )
    return response.comment


class TestCreateCommentUseCase:
    """Tests for CreateCommentUseCase."""

    @pytest.mark.asyncio
    async def test_three_levels_then_too_deep(self, unit_env):
        """Hi -> Hello -> Hey succeed; a reply to Hey is invalid input."""
        # Arrange
        content_id = await seed_content(unit_env)
        u1, u2 = _requester(handle="u1"), _requester(handle="u2")

        # Act
        hi = await _create(unit_env, content_id, "Hi", u1)
        hello = await _create(unit_env, content_id, "Hello", u2, hi.comment_id)
        hey = await _create(unit_env, content_id, "Hey", u1, hello.comment_id)

        # Assert
        assert [c.depth for c in (hi, hello, hey)] == [0, 1, 2]
        assert hello.display_name == "u2"
        with pytest.raises(NestingTooDeepError):
            await _create(unit_env, content_id, "Fourth", u2, hey.comment_id)

    @pytest.mark.asyncio
    async def test_public_view_hides_forensic_fields(self, unit_env):
        content_id = await seed_content(unit_env)

        comment = await _create(unit_env, content_id, "Hi")

        dumped = comment.model_dump()
        assert "origin_ip" not in dumped
        assert "user_agent" not in dumped

    @pytest.mark.asyncio
    async def test_stored_profile_overrides_token_claims(self, unit_env):
        """Display name comes from the stored handle, not the token."""
        content_id = await seed_content(unit_env)
        user = await seed_user(unit_env, "renamed_artist")

        comment = await _create(
            unit_env, content_id, "Hi", _requester(user.id, handle="old_name")
        )

        assert comment.display_name == "renamed_artist"
        assert comment.author_id == str(user.id)

    @pytest.mark.asyncio
    async def test_malformed_content_id_is_not_found(self, unit_env):
        with pytest.raises(NotFoundError):
            await _create(unit_env, "not-a-uuid", "Hi")

    @pytest.mark.asyncio
    async def test_malformed_parent_id_is_invalid_input(self, unit_env):
        content_id = await seed_content(unit_env)

        with pytest.raises(ValidationError):
            await _create(unit_env, content_id, "Hi", parent_id="nope")

    @pytest.mark.asyncio
    async def test_creation_budget_is_enforced_per_address(self, unit_env):
        content_id = await seed_content(unit_env)
        for i in range(10):
            await _create(unit_env, content_id, f"Comment {i}", ip="203.0.113.50")

        with pytest.raises(RateLimitExceededError):
            await _create(unit_env, content_id, "One too many", ip="203.0.113.50")

        # A different address still has its own budget
        await _create(unit_env, content_id, "Elsewhere", ip="203.0.113.51")


class TestReadUseCases:
    """Tests for GetThreadUseCase and GetRepliesUseCase."""

    @pytest.mark.asyncio
    async def test_thread_marks_callers_likes(self, unit_env):
        content_id = await seed_content(unit_env)
        liker = _requester(handle="liker")
        root = await _create(unit_env, content_id, "Root")
        reply = await _create(unit_env, content_id, "Reply", parent_id=root.comment_id)
        toggle = await unit_env.get(ToggleLikeUseCase)
        await toggle.execute(
            ToggleLikeRequest(comment_id=reply.comment_id, user_id=liker.user_id)
        )
        get_thread = await unit_env.get(GetThreadUseCase)

        mine = await get_thread.execute(
            GetThreadRequest(content_id=str(content_id), requester=liker)
        )
        anonymous = await get_thread.execute(GetThreadRequest(content_id=str(content_id)))

        [root_item] = mine.comments
        assert root_item.liked_by_me is False
        assert root_item.replies[0].liked_by_me is True
        assert root_item.replies[0].like_count == 1
        assert anonymous.comments[0].replies[0].liked_by_me is False
        assert mine.pagination.total == 1
        assert mine.pagination.has_next is False

    @pytest.mark.asyncio
    async def test_replies_page(self, unit_env):
        content_id = await seed_content(unit_env)
        root = await _create(unit_env, content_id, "Root")
        for i in range(3):
            await _create(unit_env, content_id, f"Reply {i}", parent_id=root.comment_id)
        get_replies = await unit_env.get(GetRepliesUseCase)

        response = await get_replies.execute(
            GetRepliesRequest(comment_id=root.comment_id, page=1, page_size=2)
        )

        assert [r.text for r in response.replies] == ["Reply 0", "Reply 1"]
        assert response.pagination.total_pages == 2
        assert response.pagination.has_next is True


class TestWriteUseCases:
    """Tests for edit, delete, history, like and flag use cases."""

    @pytest.mark.asyncio
    async def test_anonymous_comment_edit_is_forbidden(self, unit_env):
        content_id = await seed_content(unit_env)
        comment = await _create(unit_env, content_id, "Anonymous words")
        edit = await unit_env.get(EditCommentUseCase)

        assert comment.author_id is None
        assert comment.display_name == "Anonymous"
        with pytest.raises(NotAuthorizedError):
            await edit.execute(
                EditCommentRequest(
                    comment_id=comment.comment_id, user_id=str(uuid4()), text="Mine"
                )
            )

    @pytest.mark.asyncio
    async def test_edit_then_history(self, unit_env):
        content_id = await seed_content(unit_env)
        author = _requester(handle="author")
        comment = await _create(unit_env, content_id, "First draft", author)
        edit = await unit_env.get(EditCommentUseCase)
        history = await unit_env.get(GetEditHistoryUseCase)

        edited = await edit.execute(
            EditCommentRequest(
                comment_id=comment.comment_id, user_id=author.user_id, text="Final"
            )
        )
        response = await history.execute(
            GetEditHistoryRequest(comment_id=comment.comment_id, requester=author)
        )

        assert edited.comment.text == "Final"
        assert edited.comment.is_edited is True
        assert [h.previous_text for h in response.history] == ["First draft"]

    @pytest.mark.asyncio
    async def test_moderator_delete_is_reported(self, unit_env):
        content_id = await seed_content(unit_env)
        comment = await _create(unit_env, content_id, "Rude", _requester())
        delete = await unit_env.get(DeleteCommentUseCase)

        response = await delete.execute(
            DeleteCommentRequest(
                comment_id=comment.comment_id,
                requester=_requester(handle="mod", role=UserRole.MODERATOR),
                reason="Harassment",
            )
        )

        assert response.is_active is False
        assert response.deleted_by_moderator is True

    @pytest.mark.asyncio
    async def test_revoked_moderator_cannot_delete(self, unit_env):
        """The stored role wins over a stale moderator claim in the token."""
        content_id = await seed_content(unit_env)
        comment = await _create(unit_env, content_id, "Rude", _requester())
        demoted = await seed_user(unit_env, "former_mod", UserRole.USER)
        delete = await unit_env.get(DeleteCommentUseCase)

        with pytest.raises(NotAuthorizedError):
            await delete.execute(
                DeleteCommentRequest(
                    comment_id=comment.comment_id,
                    requester=_requester(demoted.id, "former_mod", UserRole.MODERATOR),
                )
            )

    @pytest.mark.asyncio
    async def test_anonymous_requester_cannot_delete(self, unit_env):
        content_id = await seed_content(unit_env)
        comment = await _create(unit_env, content_id, "Anonymous words")
        delete = await unit_env.get(DeleteCommentUseCase)

        with pytest.raises(NotAuthorizedError):
            await delete.execute(
                DeleteCommentRequest(comment_id=comment.comment_id, requester=Requester())
            )

    @pytest.mark.asyncio
    async def test_like_toggle_sequence(self, unit_env):
        content_id = await seed_content(unit_env)
        comment = await _create(unit_env, content_id, "Comment X")
        toggle = await unit_env.get(ToggleLikeUseCase)
        request = ToggleLikeRequest(comment_id=comment.comment_id, user_id=str(uuid4()))

        counts = [(await toggle.execute(request)).like_count for _ in range(3)]

        assert counts == [1, 0, 1]

    @pytest.mark.asyncio
    async def test_repeat_flag_keeps_count(self, unit_env):
        content_id = await seed_content(unit_env)
        comment = await _create(unit_env, content_id, "Comment X")
        flag = await unit_env.get(FlagCommentUseCase)
        user_id = str(uuid4())

        await flag.execute(
            FlagCommentRequest(comment_id=comment.comment_id, user_id=user_id, reason="spam")
        )
        second = await flag.execute(
            FlagCommentRequest(comment_id=comment.comment_id, user_id=user_id, reason="other")
        )

        assert second.flagged is True
        assert second.flag_count == 1
