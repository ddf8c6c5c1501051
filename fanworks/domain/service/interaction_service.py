"""Interaction domain service (likes and flags)."""

from dataclasses import dataclass
from uuid import uuid4

import logfire

from fanworks.config import CommentSettings
from fanworks.domain.error import CommentInactiveError, NotFoundError, ValidationError
from fanworks.domain.model import Comment, Flag, Like, utcnow
from fanworks.domain.repository import CommentRepository, FlagRepository, LikeRepository
from fanworks.domain.value import CommentCounter, CommentId, FlagId, FlagReason, UserId

from .base import Service


@dataclass(frozen=True)
class LikeToggleResult:
    """State of a user's like after a toggle."""

    liked: bool
    like_count: int


@dataclass(frozen=True)
class FlagResult:
    """State of a comment's flags after a flag request."""

    flagged: bool
    flag_count: int
    needs_review: bool


def parse_flag_reason(reason: FlagReason | str) -> FlagReason:
    """Convert a raw reason into a FlagReason.

    Raises:
        ValidationError: If the reason is not one of the allowed values
    """
    try:
        return FlagReason(reason)
    except ValueError:
        allowed = ", ".join(r.value for r in FlagReason)
        raise ValidationError(f"Invalid flag reason '{reason}', expected one of: {allowed}")


class InteractionService(Service):
    """Domain service for likes and flags.

    Counters on the comment row only move when the store reports that a
    like or flag row was actually inserted or deleted, so repeated or
    concurrent requests from the same user never double count.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        like_repository: LikeRepository,
        flag_repository: FlagRepository,
        comment_settings: CommentSettings,
    ) -> None:
        """Initialize interaction service.

        Args:
            comment_repository: Comment repository
            like_repository: Like repository
            flag_repository: Flag repository
            comment_settings: Comment rules (flag review threshold)
        """
        self.comment_repository = comment_repository
        self.like_repository = like_repository
        self.flag_repository = flag_repository
        self.settings = comment_settings

    async def _get_active_comment(self, comment_id: CommentId, action: str) -> Comment:
        comment = await self.comment_repository.find_by_id(comment_id)
        if not comment:
            logfire.warn(f"{action.capitalize()} on missing comment", comment_id=str(comment_id))
            raise NotFoundError("Comment", str(comment_id))
        if not comment.is_active:
            logfire.warn(f"{action.capitalize()} on deleted comment", comment_id=str(comment_id))
            raise CommentInactiveError(str(comment_id), action)
        return comment

    async def _current_count(self, comment_id: CommentId, counter: CommentCounter) -> int:
        comment = await self.comment_repository.find_by_id(comment_id)
        if not comment:
            raise NotFoundError("Comment", str(comment_id))
        return getattr(comment, counter.value)

    async def toggle_like(self, comment_id: CommentId, user_id: UserId) -> LikeToggleResult:
        """Like a comment, or remove the like if the user already likes it.

        Args:
            comment_id: Comment ID
            user_id: Authenticated user ID

        Returns:
            Resulting like state and count

        Raises:
            NotFoundError: If the comment does not exist
            CommentInactiveError: If the comment was deleted
        """
        with logfire.span(
            "interaction_service.toggle_like",
            comment_id=str(comment_id),
            user_id=str(user_id),
        ):
            await self._get_active_comment(comment_id, "like")

            if await self.like_repository.remove(comment_id, user_id):
                liked = False
                count = await self.comment_repository.increment_counter(
                    comment_id, CommentCounter.LIKES, -1
                )
            else:
                liked = True
                inserted = await self.like_repository.add(
                    Like(comment_id=comment_id, user_id=user_id, created_at=utcnow())
                )
                if inserted:
                    count = await self.comment_repository.increment_counter(
                        comment_id, CommentCounter.LIKES, 1
                    )
                else:
                    # A concurrent request from the same user inserted first
                    logfire.info(
                        "Concurrent like reconciled",
                        comment_id=str(comment_id),
                        user_id=str(user_id),
                    )
                    count = await self._current_count(comment_id, CommentCounter.LIKES)

            if count is None:
                raise NotFoundError("Comment", str(comment_id))

            logfire.info(
                "Comment liked" if liked else "Comment unliked",
                comment_id=str(comment_id),
                user_id=str(user_id),
                like_count=count,
            )
            return LikeToggleResult(liked=liked, like_count=count)

    async def flag_comment(
        self,
        comment_id: CommentId,
        user_id: UserId,
        reason: FlagReason | str,
    ) -> FlagResult:
        """Flag a comment for moderation.

        Flagging is idempotent per user: a second flag by the same user
        returns the current state without counting again. Reaching the
        review threshold marks the comment for review; it stays visible.

        Args:
            comment_id: Comment ID
            user_id: Authenticated user ID
            reason: One of spam, harassment, inappropriate, other

        Returns:
            Resulting flag state

        Raises:
            ValidationError: If the reason is not allowed
            NotFoundError: If the comment does not exist
            CommentInactiveError: If the comment was deleted
        """
        with logfire.span(
            "interaction_service.flag_comment",
            comment_id=str(comment_id),
            user_id=str(user_id),
            reason=str(reason),
        ):
            flag_reason = parse_flag_reason(reason)
            comment = await self._get_active_comment(comment_id, "flag")

            inserted = await self.flag_repository.add(
                Flag(
                    id=FlagId(uuid4()),
                    comment_id=comment_id,
                    user_id=user_id,
                    reason=flag_reason,
                    flagged_at=utcnow(),
                )
            )
            if not inserted:
                logfire.info(
                    "Duplicate flag ignored",
                    comment_id=str(comment_id),
                    user_id=str(user_id),
                )
                current = await self.comment_repository.find_by_id(comment_id)
                if not current:
                    raise NotFoundError("Comment", str(comment_id))
                return FlagResult(
                    flagged=True,
                    flag_count=current.flag_count,
                    needs_review=current.needs_review,
                )

            count = await self.comment_repository.increment_counter(
                comment_id, CommentCounter.FLAGS, 1
            )
            if count is None:
                raise NotFoundError("Comment", str(comment_id))

            needs_review = comment.needs_review
            if not needs_review and count >= self.settings.flag_review_threshold:
                await self.comment_repository.mark_needs_review(comment_id)
                needs_review = True
                logfire.warn(
                    "Comment needs review",
                    comment_id=str(comment_id),
                    flag_count=count,
                    threshold=self.settings.flag_review_threshold,
                )

            logfire.info(
                "Comment flagged",
                comment_id=str(comment_id),
                user_id=str(user_id),
                reason=flag_reason.value,
                flag_count=count,
            )
            return FlagResult(flagged=True, flag_count=count, needs_review=needs_review)

    async def get_liked_comment_ids(
        self, user_id: UserId, comment_ids: list[CommentId]
    ) -> set[CommentId]:
        """Check which comments a user likes.

        Args:
            user_id: User ID
            comment_ids: Comment IDs to check

        Returns:
            Set of liked comment IDs
        """
        if not comment_ids:
            return set()

        # Batch query to fetch all likes at once (avoid N+1)
        return await self.like_repository.find_liked_comment_ids(user_id, comment_ids)
