"""Rate limit infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
import redis.asyncio as redis

from fanworks.adapter.ratelimit import RedisRateLimiter, create_redis_client
from fanworks.config import Settings
from fanworks.domain.service import RateLimiter
from fanworks.util.di.base import ProviderBase
from fanworks.util.observability import instrument_redis


class RateLimitProvider(ProviderBase):
    """Rate limit component base."""

    __mock_component__ = "ratelimit"


class ProdRateLimitProvider(RateLimitProvider):
    """Production rate limiter sharing counters through Redis."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_redis_client(self, settings: Settings) -> AsyncIterator[redis.Redis]:
        """Provide Redis client, closed with the container."""
        instrument_redis()
        client = create_redis_client(settings.redis)
        yield client
        await client.aclose()
        logfire.info("Redis client closed")

    @provide(scope=Scope.APP)
    def get_rate_limiter(self, client: redis.Redis, settings: Settings) -> RateLimiter:
        """Provide the comment rate limiter."""
        return RedisRateLimiter(client, key_prefix=settings.redis.key_prefix)
