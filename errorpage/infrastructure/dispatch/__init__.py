"""
Dispatch infrastructure adapters.
"""

from errorpage.infrastructure.dispatch.event_reporter import EventBusErrorReporter
from errorpage.infrastructure.dispatch.sentry_reporter import (
    SentryErrorReporter,
    init_sentry,
)

__all__ = ["EventBusErrorReporter", "SentryErrorReporter", "init_sentry"]
