"""Integration tests for like and flag uniqueness in PostgreSQL.

These run the ON CONFLICT paths of the Postgres repositories and need a
migrated database:

    DATABASE__URL=postgresql+asyncpg://... pytest tests/integration
"""

import asyncio
import os
from uuid import uuid4

import pytest
import pytest_asyncio

from fanworks.domain.model import Flag, Like
from fanworks.domain.repository import CommentRepository, FlagRepository, LikeRepository
from fanworks.domain.service import InteractionService, ThreadService
from fanworks.domain.value import CommentId, FlagId, FlagReason, UserId
from tests.conftest import seed_content
from tests.di import build_test_container

pytestmark = pytest.mark.skipif(
    "DATABASE__URL" not in os.environ,
    reason="needs a migrated PostgreSQL at DATABASE__URL",
)


@pytest_asyncio.fixture
async def pg_container():
    container = build_test_container(unmock={"persistence"})
    yield container
    await container.close()


async def _posted_comment(container) -> CommentId:
    # Committed when the request scope closes
    async with container() as request:
        content_id = await seed_content(request)
        thread_service = await request.get(ThreadService)
        comment = await thread_service.create_comment(
            content_id=content_id, text="Comment X"
        )
    return comment.id


async def _counts(container, comment_id: CommentId):
    async with container() as request:
        comment_repo = await request.get(CommentRepository)
        like_repo = await request.get(LikeRepository)
        flag_repo = await request.get(FlagRepository)
        comment = await comment_repo.find_by_id(comment_id)
        return (
            comment,
            await like_repo.count_by_comment(comment_id),
            await flag_repo.count_by_comment(comment_id),
        )


class TestLikeConflicts:
    """Tests for PostgresLikeRepository and concurrent toggles."""

    @pytest.mark.asyncio
    async def test_duplicate_insert_reports_no_row(self, pg_container):
        comment_id = await _posted_comment(pg_container)
        user_id = UserId(uuid4())

        async with pg_container() as request:
            like_repo = await request.get(LikeRepository)
            first = await like_repo.add(Like(comment_id=comment_id, user_id=user_id))
            second = await like_repo.add(Like(comment_id=comment_id, user_id=user_id))

        assert (first, second) == (True, False)

    @pytest.mark.asyncio
    async def test_concurrent_toggles_keep_counter_equal_to_rows(self, pg_container):
        comment_id = await _posted_comment(pg_container)
        user_id = UserId(uuid4())

        async def toggle():
            async with pg_container() as request:
                service = await request.get(InteractionService)
                return await service.toggle_like(comment_id, user_id)

        await asyncio.gather(toggle(), toggle())

        comment, likes, _ = await _counts(pg_container, comment_id)
        assert likes in (0, 1)
        assert comment.like_count == likes


class TestFlagConflicts:
    """Tests for PostgresFlagRepository and concurrent flags."""

    @pytest.mark.asyncio
    async def test_duplicate_insert_reports_no_row(self, pg_container):
        comment_id = await _posted_comment(pg_container)
        user_id = UserId(uuid4())

        def flag() -> Flag:
            return Flag(
                id=FlagId(uuid4()),
                comment_id=comment_id,
                user_id=user_id,
                reason=FlagReason.SPAM,
            )

        async with pg_container() as request:
            flag_repo = await request.get(FlagRepository)
            first = await flag_repo.add(flag())
            second = await flag_repo.add(flag())

        assert (first, second) == (True, False)

    @pytest.mark.asyncio
    async def test_concurrent_flags_count_once(self, pg_container):
        comment_id = await _posted_comment(pg_container)
        user_id = UserId(uuid4())

        async def flag(reason: str):
            async with pg_container() as request:
                service = await request.get(InteractionService)
                return await service.flag_comment(comment_id, user_id, reason)

        await asyncio.gather(flag("spam"), flag("other"))

        comment, _, flags = await _counts(pg_container, comment_id)
        assert flags == 1
        assert comment.flag_count == 1
