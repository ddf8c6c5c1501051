"""Edit history repository interface."""

from abc import ABC, abstractmethod
from typing import List, Sequence

from fanworks.domain.model.edit_history import EditHistory
from fanworks.domain.value import CommentId


class EditHistoryRepository(ABC):
    """Append-only store of previous comment texts."""

    @abstractmethod
    async def append(self, entry: EditHistory) -> EditHistory:
        """Append one history row.

        Args:
            entry: History row to append

        Returns:
            The stored row
        """
        pass

    @abstractmethod
    async def find_by_comment(self, comment_id: CommentId) -> List[EditHistory]:
        """Find the edit history of a comment, oldest edit first."""
        pass

    @abstractmethod
    async def delete_by_comments(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete history rows of the given comments (hard delete only).

        Returns:
            Number of rows deleted
        """
        pass
