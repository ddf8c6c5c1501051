"""In-memory like repository for testing."""

from typing import Sequence

from fanworks.domain.model.like import Like
from fanworks.domain.repository.like import LikeRepository
from fanworks.domain.value import CommentId, UserId


class InMemoryLikeRepository(LikeRepository):
    """In-memory implementation of LikeRepository for testing.

    Keyed by (comment_id, user_id), mirroring the unique constraint.
    """

    def __init__(self) -> None:
        self._likes: dict[tuple[CommentId, UserId], Like] = {}

    async def add(self, like: Like) -> bool:
        """Insert a like unless it already exists."""
        key = (like.comment_id, like.user_id)
        if key in self._likes:
            return False
        self._likes[key] = like
        return True

    async def remove(self, comment_id: CommentId, user_id: UserId) -> bool:
        """Delete a user's like on a comment."""
        return self._likes.pop((comment_id, user_id), None) is not None

    async def count_by_comment(self, comment_id: CommentId) -> int:
        """Count likes on a comment."""
        return sum(1 for c_id, _ in self._likes if c_id == comment_id)

    async def find_liked_comment_ids(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> set[CommentId]:
        """Find which of the given comments a user likes."""
        return {c_id for c_id in comment_ids if (c_id, user_id) in self._likes}

    async def delete_by_comments(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete all likes on the given comments."""
        wanted = set(comment_ids)
        keys = [key for key in self._likes if key[0] in wanted]
        for key in keys:
            del self._likes[key]
        return len(keys)
