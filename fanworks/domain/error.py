"""Domain layer errors.

Each base class is one error kind surfaced to callers:

- NotFoundError: a referenced comment or content item does not exist
- ValidationError: malformed input (text length, flag reason, nesting)
- NotAuthorizedError: ownership or role violation
- BusinessRuleViolationError: well-formed request, illegal state transition
- RateLimitExceededError: creation budget exhausted
- StoreUnavailableError: the comment store cannot be reached
"""


class DomainError(Exception):
    """Base domain error."""

    kind = "error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(DomainError):
    """Domain validation error."""

    kind = "invalid_input"


class NestingTooDeepError(ValidationError):
    """Raised when replying to a comment that is already at maximum depth."""

    def __init__(self, parent_id: str, max_depth: int):
        self.parent_id = parent_id
        super().__init__(
            f"Comment nesting too deep: comment {parent_id} is at depth {max_depth} "
            "and cannot receive replies"
        )


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    kind = "invalid"


class CommentInactiveError(BusinessRuleViolationError):
    """Raised when acting on a soft-deleted comment."""

    def __init__(self, comment_id: str, action: str):
        self.comment_id = comment_id
        super().__init__(f"Cannot {action} deleted comment {comment_id}")


class EditWindowExpiredError(BusinessRuleViolationError):
    """Raised when the edit window of a comment has passed."""

    def __init__(self, comment_id: str, window_hours: int):
        super().__init__(
            f"Edit window expired: comment {comment_id} can only be edited "
            f"within {window_hours} hours of posting"
        )


class NotAuthorizedError(DomainError):
    """Raised when a user attempts an action they are not allowed to perform."""

    kind = "forbidden"

    def __init__(self, action: str, resource: str, resource_id: str):
        super().__init__(f"Not authorized to {action} {resource} {resource_id}")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    kind = "not_found"

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class RateLimitExceededError(DomainError):
    """Raised when the comment creation budget is exhausted."""

    kind = "throttled"

    def __init__(self, retry_after: int):
        self.retry_after = retry_after
        super().__init__(
            f"Too many comments created, please try again in {retry_after} seconds"
        )


class StoreUnavailableError(DomainError):
    """Raised when the comment store cannot be reached."""

    kind = "unavailable"

    def __init__(self, message: str = "Comment store unavailable"):
        super().__init__(message)
