"""Unit tests for RateLimitService."""

from uuid import uuid4

import pytest

from fanworks.config import RateLimitSettings
from fanworks.domain.error import RateLimitExceededError
from fanworks.domain.service import RateLimitService
from fanworks.domain.value import UserId
from tests.di import InMemoryRateLimiter
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


def _service(**overrides) -> RateLimitService:
    settings = RateLimitSettings(max_comments=2, window_seconds=60, **overrides)
    return RateLimitService(InMemoryRateLimiter(clock=lambda: 100.0), settings)


class TestBudgetKey:
    """Tests for budget_key."""

    def test_ip_scope_ignores_user(self):
        service = _service(scope="ip")

        key = service.budget_key("198.51.100.4", UserId(uuid4()))

        assert key == "comment:ip:198.51.100.4"

    def test_account_scope_uses_user_when_known(self):
        service = _service(scope="account")
        user_id = UserId(uuid4())

        assert service.budget_key("198.51.100.4", user_id) == f"comment:user:{user_id}"
        assert service.budget_key("198.51.100.4", None) == "comment:ip:198.51.100.4"

    def test_missing_address_shares_unknown_budget(self):
        assert _service().budget_key(None, None) == "comment:ip:unknown"


class TestCheckCommentBudget:
    """Tests for check_comment_budget."""

    @pytest.mark.asyncio
    async def test_budget_exhaustion_raises_with_retry_after(self):
        service = _service()

        await service.check_comment_budget("198.51.100.4")
        await service.check_comment_budget("198.51.100.4")
        with pytest.raises(RateLimitExceededError) as exc_info:
            await service.check_comment_budget("198.51.100.4")

        assert exc_info.value.retry_after == 60

    @pytest.mark.asyncio
    async def test_budgets_are_per_address(self):
        service = _service()

        for _ in range(2):
            await service.check_comment_budget("198.51.100.4")

        await service.check_comment_budget("198.51.100.5")

    @pytest.mark.asyncio
    async def test_account_scope_separates_users_behind_one_address(self):
        """Users sharing a NAT address do not drain each other's budget."""
        service = _service(scope="account")
        first, second = UserId(uuid4()), UserId(uuid4())

        for _ in range(2):
            await service.check_comment_budget("198.51.100.4", first)

        await service.check_comment_budget("198.51.100.4", second)
        with pytest.raises(RateLimitExceededError):
            await service.check_comment_budget("198.51.100.4", first)

    @pytest.mark.asyncio
    async def test_disabled_limiter_never_throttles(self):
        service = _service(enabled=False)

        for _ in range(10):
            await service.check_comment_budget("198.51.100.4")

    @pytest.mark.asyncio
    async def test_service_is_wired_from_settings(self, unit_env):
        service = await unit_env.get(RateLimitService)

        assert service.settings.max_comments == 10
        assert service.settings.window_seconds == 300
