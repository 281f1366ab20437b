"""
Logging configuration for the application.

One stdout handler for the whole process. The errorpage loggers follow
the configured level; third-party loggers (uvicorn, sentry_sdk) are
held at WARNING unless the application runs in debug mode, so a
reported exception shows up once, from the exception strategy.
Never logs request bodies, headers or the Sentry DSN.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

THIRD_PARTY_LOGGERS = ("uvicorn.access", "uvicorn.error", "sentry_sdk.errors")


def resolve_level(level: str) -> int:
    """Map a level name to its number; unknown names resolve to INFO."""
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.INFO


def configure_logging(level: str = "INFO", debug: bool = False) -> None:
    """Configure logging for the application.

    Args:
        level: Level name for the errorpage loggers (DEBUG, INFO, ...).
        debug: Let third-party loggers through at the same level.
    """
    app_level = resolve_level(level)
    logging.basicConfig(
        level=app_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )
    logging.getLogger("errorpage").setLevel(app_level)

    third_party_level = app_level if debug else max(app_level, logging.WARNING)
    for name in THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(third_party_level)
