#!/usr/bin/env python3
"""Start the comments API with logging and Logfire configured first."""

import sys

import logfire
import uvicorn

from fanworks.config import Settings
from fanworks.util.logging import setup_logging
from fanworks.util.observability import configure_logfire


def main() -> int:
    """Start the application, recording startup failures in Logfire."""
    settings = Settings()

    # Both must be configured before the app module is imported by uvicorn
    setup_logging(settings)
    configure_logfire(settings)

    try:
        logfire.info(
            "Starting comments API", host=settings.host, port=settings.port
        )
        uvicorn.run(
            "fanworks.interface.api.app:app",
            host=settings.host,
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )
        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
