"""
Dependency wiring for the dispatch bounded context.

Builds the event manager, reporters and exception strategy from
settings. ``create_app`` is the only caller; tests use it to build an
isolated stack with their own reporter.
"""

from dataclasses import dataclass
from typing import Optional

from errorpage.core.config import Settings
from errorpage.domain.dispatch.events import LOG_EXCEPTION, EventManager
from errorpage.domain.dispatch.exception_strategy import (
    ExceptionStrategy,
    ExceptionStrategyConfig,
)
from errorpage.domain.dispatch.ports import ErrorReporterPort
from errorpage.infrastructure.dispatch.event_reporter import EventBusErrorReporter
from errorpage.infrastructure.dispatch.sentry_reporter import SentryErrorReporter


@dataclass
class ErrorHandlingStack:
    """Everything the HTTP layer needs to handle dispatch errors."""

    events: EventManager
    strategy: ExceptionStrategy


def build_error_handling(
    settings: Settings,
    tracker: Optional[ErrorReporterPort] = None,
) -> ErrorHandlingStack:
    """Wire the exception strategy onto a fresh event manager.

    The strategy reports through the log.exception hook; ``tracker``
    (Sentry by default) is the listener on that hook.

    Args:
        settings: Application settings.
        tracker: Error tracker listening on log.exception.
    """
    events = EventManager()
    tracker = tracker or SentryErrorReporter()
    events.attach(LOG_EXCEPTION, lambda exception, **_: tracker.report(exception))

    strategy = ExceptionStrategy(
        reporter=EventBusErrorReporter(events),
        config=ExceptionStrategyConfig.from_settings(settings),
    )
    strategy.attach(events)
    return ErrorHandlingStack(events=events, strategy=strategy)
