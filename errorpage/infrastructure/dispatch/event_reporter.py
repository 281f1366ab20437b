"""
Event bus adapter for the ErrorReporterPort.

Reports an exception by triggering the log.exception hook, so any number
of trackers can subscribe to it. The report id is whatever the last
listener returned.
"""

import logging
from typing import Any, Optional

from errorpage.domain.dispatch.events import LOG_EXCEPTION, EventManager
from errorpage.domain.dispatch.ports import ErrorReporterPort

logger = logging.getLogger(__name__)


class EventBusErrorReporter(ErrorReporterPort):
    """Delegates reporting to listeners on the log.exception hook.

    Args:
        events: Event manager the trackers are attached to.
        source: Passed to listeners as ``source``; identifies the caller.
    """

    def __init__(self, events: EventManager, source: Any = None) -> None:
        self._events = events
        self._source = source

    def report(self, exception: BaseException) -> Optional[str]:
        if not self._events.has_listeners(LOG_EXCEPTION):
            logger.warning(
                "No listener on %s, %s was not reported",
                LOG_EXCEPTION,
                type(exception).__name__,
            )
        responses = self._events.trigger(
            LOG_EXCEPTION, exception=exception, source=self._source
        )
        return responses.last()
