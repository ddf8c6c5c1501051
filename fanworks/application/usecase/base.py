"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any
from uuid import UUID

from fanworks.domain.error import NotFoundError, ValidationError


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


def parse_resource_id(value: str, resource: str) -> UUID:
    """Parse an ID taken from the URL.

    A malformed ID cannot name an existing resource, so it is reported
    as not found.
    """
    try:
        return UUID(value)
    except ValueError:
        raise NotFoundError(resource, value)


def parse_reference_id(value: str, field: str) -> UUID:
    """Parse an ID taken from a request body.

    Raises:
        ValidationError: If the value is not a UUID
    """
    try:
        return UUID(value)
    except ValueError:
        raise ValidationError(f"{field} must be a valid UUID")
