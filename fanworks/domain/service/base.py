"""Base service class for domain services."""

from fanworks.domain.error import ValidationError


class Service:
    """Base class for all domain services.

    Domain services contain business logic that doesn't naturally belong
    to a single entity or spans multiple entities/aggregates.
    """

    pass


def clean_comment_text(text: str, max_length: int) -> str:
    """Trim comment text and enforce its length limits.

    Args:
        text: Raw text from the request
        max_length: Maximum number of characters after trimming

    Returns:
        Trimmed text

    Raises:
        ValidationError: If the trimmed text is empty or too long
    """
    trimmed = (text or "").strip()
    if not trimmed:
        raise ValidationError("Comment cannot be empty")
    if len(trimmed) > max_length:
        raise ValidationError(f"Comment too long (max {max_length} characters)")
    return trimmed


def check_pagination(page: int, page_size: int, max_page_size: int) -> int:
    """Validate pagination parameters.

    Returns:
        Offset of the first item on the page

    Raises:
        ValidationError: If page or page_size is out of range
    """
    if page < 1:
        raise ValidationError("page must be 1 or greater")
    if page_size < 1 or page_size > max_page_size:
        raise ValidationError(f"page_size must be between 1 and {max_page_size}")
    return (page - 1) * page_size
