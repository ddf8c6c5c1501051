"""Logfire wiring for the comments service.

Spans and log records carry comment, content and user ids. Origin
addresses and user agents are stored with the comment row for moderation
forensics and never leave the database: they are dropped from request
attributes and scrubbed from any attribute that slips through.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from fanworks.config import Settings

SERVICE_NAME = "fanworks-comments"

_CLIENT_HEADERS = frozenset({"x-forwarded-for", "x-real-ip", "cookie", "user-agent"})

# Attribute names matching these are redacted by logfire's scrubber.
_FORENSIC_PATTERNS = ["origin_ip", "user_agent", "client_ip"]


def _should_send(settings: Settings) -> bool:
    # Explicit setting wins, otherwise a token implies sending
    if settings.observability.send_to_logfire is not None:
        return settings.observability.send_to_logfire
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure logfire from settings.

    OBSERVABILITY__LOGFIRE_TOKEN enables export to Logfire cloud unless
    OBSERVABILITY__SEND_TO_LOGFIRE says otherwise.
    """
    send_to_logfire = _should_send(settings)

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version="0.1.0",
        environment=settings.environment,
        token=settings.observability.logfire_token,
        send_to_logfire=send_to_logfire,
        scrubbing=logfire.ScrubbingOptions(extra_patterns=_FORENSIC_PATTERNS),
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def _request_attributes(request, attributes: dict) -> dict:
    kept = {
        key: value
        for key, value in attributes.items()
        if key.lower() not in _CLIENT_HEADERS
    }
    kept["method"] = request.method
    kept["path"] = request.url.path
    return kept


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request by method and path, without client headers."""
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace queries issued through the async engine."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)


def instrument_redis() -> None:
    """Trace Redis commands without statements, as counter keys hold addresses."""
    logfire.instrument_redis(capture_statement=False)
