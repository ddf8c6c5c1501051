"""In-memory edit history repository for testing."""

from typing import Sequence

from fanworks.domain.model.edit_history import EditHistory
from fanworks.domain.repository.edit_history import EditHistoryRepository
from fanworks.domain.value import CommentId


class InMemoryEditHistoryRepository(EditHistoryRepository):
    """In-memory implementation of EditHistoryRepository for testing."""

    def __init__(self) -> None:
        self._entries: list[EditHistory] = []

    async def append(self, entry: EditHistory) -> EditHistory:
        """Append one history row."""
        self._entries.append(entry)
        return entry

    async def find_by_comment(self, comment_id: CommentId) -> list[EditHistory]:
        """Find the edit history of a comment, oldest edit first."""
        # Append order breaks ties between edits in the same instant
        return [e for e in self._entries if e.comment_id == comment_id]

    async def delete_by_comments(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete history rows of the given comments."""
        wanted = set(comment_ids)
        before = len(self._entries)
        self._entries = [e for e in self._entries if e.comment_id not in wanted]
        return before - len(self._entries)
