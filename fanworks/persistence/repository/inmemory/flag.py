"""In-memory flag repository for testing."""

from typing import Sequence

from fanworks.domain.model.flag import Flag
from fanworks.domain.repository.flag import FlagRepository
from fanworks.domain.value import CommentId, UserId


class InMemoryFlagRepository(FlagRepository):
    """In-memory implementation of FlagRepository for testing."""

    def __init__(self) -> None:
        self._flags: dict[tuple[CommentId, UserId], Flag] = {}

    async def add(self, flag: Flag) -> bool:
        """Insert a flag unless the user already flagged the comment."""
        key = (flag.comment_id, flag.user_id)
        if key in self._flags:
            return False
        self._flags[key] = flag
        return True

    async def count_by_comment(self, comment_id: CommentId) -> int:
        """Count flags on a comment."""
        return sum(1 for c_id, _ in self._flags if c_id == comment_id)

    async def delete_by_comments(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete all flags on the given comments."""
        wanted = set(comment_ids)
        keys = [key for key in self._flags if key[0] in wanted]
        for key in keys:
            del self._flags[key]
        return len(keys)
