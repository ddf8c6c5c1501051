"""Repository interfaces for the Fanworks comment store.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from fanworks.domain.repository.comment import CommentRepository
from fanworks.domain.repository.content import ContentRegistry
from fanworks.domain.repository.edit_history import EditHistoryRepository
from fanworks.domain.repository.flag import FlagRepository
from fanworks.domain.repository.like import LikeRepository
from fanworks.domain.repository.user import UserRepository

__all__ = [
    "CommentRepository",
    "ContentRegistry",
    "EditHistoryRepository",
    "FlagRepository",
    "LikeRepository",
    "UserRepository",
]
