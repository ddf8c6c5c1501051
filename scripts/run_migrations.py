#!/usr/bin/env python3
"""Apply database migrations, recording failures in Logfire."""

import sys

import logfire
from alembic import command
from alembic.config import Config

from fanworks.config import Settings
from fanworks.util.logging import setup_logging
from fanworks.util.observability import configure_logfire


def main(revision: str = "head") -> int:
    """Upgrade the comment store schema to ``revision``."""
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    try:
        with logfire.span("migrations.upgrade", revision=revision):
            command.upgrade(Config("alembic.ini"), revision)
        logfire.info("Database migrations completed", revision=revision)
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Fail the deploy rather than start against a broken schema
        raise


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))
