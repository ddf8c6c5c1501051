"""Mock providers for testing."""

from .persistence import MockPersistenceProvider
from .ratelimit import InMemoryRateLimiter, MockRateLimitProvider
from .container import build_test_container

__all__ = [
    "InMemoryRateLimiter",
    "MockPersistenceProvider",
    "MockRateLimitProvider",
    "build_test_container",
]
