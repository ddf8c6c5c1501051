"""Comment creation throttling."""

from dataclasses import dataclass

import logfire

from fanworks.config import RateLimitSettings
from fanworks.domain.error import RateLimitExceededError
from fanworks.domain.value import UserId

from .base import Service


@dataclass(frozen=True)
class RateLimitDecision:
    """Outcome of consuming one unit of a budget."""

    allowed: bool
    remaining: int
    retry_after: int  # seconds until the current window resets


class RateLimiter:
    """Generic rate limiter interface.

    Implementations keep one budget per key and must make consume atomic
    with respect to concurrent callers.
    """

    async def consume(self, key: str, limit: int, window_seconds: int) -> RateLimitDecision:
        """Consume one unit of the budget for key.

        Args:
            key: Budget key (e.g. "ip:203.0.113.7")
            limit: Units allowed per window
            window_seconds: Window length

        Returns:
            Whether the unit was granted
        """
        raise NotImplementedError


class RateLimitService(Service):
    """Domain service enforcing the comment creation budget."""

    def __init__(self, rate_limiter: RateLimiter, settings: RateLimitSettings) -> None:
        """Initialize rate limit service.

        Args:
            rate_limiter: Rate limiter adapter
            settings: Budget and scope configuration
        """
        self.rate_limiter = rate_limiter
        self.settings = settings

    def budget_key(self, origin_ip: str | None, user_id: UserId | None) -> str:
        """Choose the budget a request draws from.

        With account scope, authenticated users are keyed by their ID.
        Everyone else is keyed by client address.
        """
        if self.settings.scope == "account" and user_id is not None:
            return f"comment:user:{user_id}"
        return f"comment:ip:{origin_ip or 'unknown'}"

    async def check_comment_budget(
        self, origin_ip: str | None, user_id: UserId | None = None
    ) -> None:
        """Consume one comment from the requester's budget.

        Raises:
            RateLimitExceededError: If the budget for the window is exhausted
        """
        if not self.settings.enabled:
            return

        key = self.budget_key(origin_ip, user_id)
        decision = await self.rate_limiter.consume(
            key, self.settings.max_comments, self.settings.window_seconds
        )
        if not decision.allowed:
            logfire.warn(
                "Comment rate limit exceeded",
                scope=self.settings.scope,
                user_id=str(user_id) if user_id else None,
                retry_after=decision.retry_after,
            )
            raise RateLimitExceededError(decision.retry_after)
