"""
Sentry adapter for the ErrorReporterPort.

Sends exceptions to Sentry through the global sentry_sdk hub and returns
the Sentry event id, which the error page shows to the user.
"""

import logging
from typing import Any, Optional

import sentry_sdk

from errorpage.domain.dispatch.ports import ErrorReporterPort

logger = logging.getLogger(__name__)


def init_sentry(settings: Any) -> bool:
    """Initialize the Sentry SDK if a DSN is configured.

    Args:
        settings: Application settings (sentry_dsn, environment, version,
            sentry_traces_sample_rate).

    Returns:
        True if the SDK was initialized.
    """
    if not settings.sentry_dsn:
        logger.info("SENTRY_DSN not set, error reporting to Sentry is disabled")
        return False

    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.environment,
        release=f"{settings.project_name}@{settings.version}",
        traces_sample_rate=settings.sentry_traces_sample_rate,
    )
    logger.info("Sentry integration initialized (environment=%s)", settings.environment)
    return True


class SentryErrorReporter(ErrorReporterPort):
    """Reports exceptions with ``sentry_sdk.capture_exception``.

    When the SDK was never initialized Sentry drops the event and the
    returned id is None.
    """

    def report(self, exception: BaseException) -> Optional[str]:
        event_id = sentry_sdk.capture_exception(exception)
        logger.debug("Captured %s in Sentry: %s", type(exception).__name__, event_id)
        return event_id
