"""Flag repository interface."""

from abc import ABC, abstractmethod
from typing import Sequence

from fanworks.domain.model.flag import Flag
from fanworks.domain.value import CommentId


class FlagRepository(ABC):
    """Repository for Flag entity.

    The (comment_id, user_id) pair is unique.
    """

    @abstractmethod
    async def add(self, flag: Flag) -> bool:
        """Insert a flag unless the user already flagged the comment.

        Args:
            flag: The flag to insert

        Returns:
            True if a row was inserted, False if a flag already existed
        """
        pass

    @abstractmethod
    async def count_by_comment(self, comment_id: CommentId) -> int:
        """Count flags on a comment."""
        pass

    @abstractmethod
    async def delete_by_comments(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete all flags on the given comments.

        Returns:
            Number of flags deleted
        """
        pass
