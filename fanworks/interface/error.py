"""Mapping of domain errors to HTTP responses."""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError

from fanworks.domain.error import (
    BusinessRuleViolationError,
    DomainError,
    NotAuthorizedError,
    NotFoundError,
    RateLimitExceededError,
    StoreUnavailableError,
    ValidationError,
)
from fanworks.persistence.database import is_connection_failure

# Most specific first; subclasses resolve to their base kind
STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (NotAuthorizedError, status.HTTP_403_FORBIDDEN),
    (BusinessRuleViolationError, status.HTTP_409_CONFLICT),
    (RateLimitExceededError, status.HTTP_429_TOO_MANY_REQUESTS),
    (StoreUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def status_for(error: DomainError) -> int:
    """HTTP status code for a domain error."""
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_body(detail: str, kind: str) -> dict[str, str]:
    return {"detail": detail, "error": kind}


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    """Render a domain error as JSON with its kind."""
    status_code = status_for(exc)

    headers = None
    if isinstance(exc, RateLimitExceededError):
        headers = {"Retry-After": str(exc.retry_after)}

    if status_code >= 500:
        logfire.error(
            "Request failed", path=request.url.path, kind=exc.kind, error=exc.message
        )
    else:
        logfire.info(
            "Request rejected", path=request.url.path, kind=exc.kind, error=exc.message
        )

    return JSONResponse(
        status_code=status_code,
        content=error_body(exc.message, exc.kind),
        headers=headers,
    )


async def handle_database_error(request: Request, exc: DBAPIError) -> JSONResponse:
    """Render driver errors that escaped the repositories."""
    if is_connection_failure(exc):
        logfire.error("Comment store unreachable", path=request.url.path)
        unavailable = StoreUnavailableError()
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=error_body(unavailable.message, unavailable.kind),
        )

    logfire.exception("Database error", path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal server error", "error"),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the domain and database error handlers on the app."""
    app.add_exception_handler(DomainError, handle_domain_error)
    app.add_exception_handler(DBAPIError, handle_database_error)
