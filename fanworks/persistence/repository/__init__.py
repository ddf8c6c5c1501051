"""PostgreSQL repository implementations."""

from fanworks.persistence.repository.comment import PostgresCommentRepository
from fanworks.persistence.repository.content import PostgresContentRegistry
from fanworks.persistence.repository.edit_history import PostgresEditHistoryRepository
from fanworks.persistence.repository.flag import PostgresFlagRepository
from fanworks.persistence.repository.like import PostgresLikeRepository
from fanworks.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresCommentRepository",
    "PostgresContentRegistry",
    "PostgresEditHistoryRepository",
    "PostgresFlagRepository",
    "PostgresLikeRepository",
    "PostgresUserRepository",
]
