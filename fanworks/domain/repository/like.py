"""Like repository interface."""

from abc import ABC, abstractmethod
from typing import Sequence, Set

from fanworks.domain.model.like import Like
from fanworks.domain.value import CommentId, UserId


class LikeRepository(ABC):
    """Repository for Like entity.

    The (comment_id, user_id) pair is unique. add and remove report whether
    a row actually changed, so concurrent toggles from the same user resolve
    to exactly one winner without locking.
    """

    @abstractmethod
    async def add(self, like: Like) -> bool:
        """Insert a like unless it already exists.

        Args:
            like: The like to insert

        Returns:
            True if a row was inserted, False if the user already liked the comment
        """
        pass

    @abstractmethod
    async def remove(self, comment_id: CommentId, user_id: UserId) -> bool:
        """Delete a user's like on a comment.

        Args:
            comment_id: Comment ID
            user_id: User ID

        Returns:
            True if a row was deleted, False if no like existed
        """
        pass

    @abstractmethod
    async def count_by_comment(self, comment_id: CommentId) -> int:
        """Count likes on a comment."""
        pass

    @abstractmethod
    async def find_liked_comment_ids(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> Set[CommentId]:
        """Find which of the given comments a user likes (batch query).

        Args:
            user_id: User ID
            comment_ids: Comment IDs to check

        Returns:
            Subset of comment_ids the user likes
        """
        pass

    @abstractmethod
    async def delete_by_comments(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete all likes on the given comments.

        Returns:
            Number of likes deleted
        """
        pass
