"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .content import InMemoryContentRegistry
from .edit_history import InMemoryEditHistoryRepository
from .flag import InMemoryFlagRepository
from .like import InMemoryLikeRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryContentRegistry",
    "InMemoryEditHistoryRepository",
    "InMemoryFlagRepository",
    "InMemoryLikeRepository",
    "InMemoryUserRepository",
]
