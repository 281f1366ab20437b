"""
Exception strategy: turns an unhandled dispatch error into an error page.

Listens on the dispatch.error and render.error hooks. For real exceptions
it reports to the error tracker, builds a view model for the error
template (message embeds the tracker's report id) and makes sure the
response goes out as a 500. Routing failures and events that already
carry a finished response are left alone.

The strategy never mutates the event: it returns an ErrorOutcome and the
event manager folds it into the event for the listeners that follow.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from errorpage.domain.dispatch.entities import (
    HTTP_200,
    HTTP_500,
    ROUTING_ERRORS,
    ErrorCode,
    ErrorEvent,
    ErrorOutcome,
    HttpResponse,
    ViewModel,
)
from errorpage.domain.dispatch.events import (
    DISPATCH_ERROR,
    RENDER_ERROR,
    EventManager,
    ListenerHandle,
)
from errorpage.domain.dispatch.message_template import MessageTemplate
from errorpage.domain.dispatch.ports import ErrorReporterPort

logger = logging.getLogger(__name__)

DEFAULT_EXCEPTION_MESSAGE = (
    "Oh no. Something went wrong, but we have been notified. "
    "If you are testing, tell us your eventID: %s"
)
DEFAULT_EXCEPTION_TEMPLATE = "error"


@dataclass(frozen=True)
class ExceptionStrategyConfig:
    """Process-wide error page policy. Immutable once built.

    Attributes:
        display_exceptions: Pass the raw exception to the template for display.
        message_template: Message shown to the user, with one report id slot.
        exception_template: Name of the template that renders the error page.
    """

    display_exceptions: bool = False
    message_template: MessageTemplate = field(
        default_factory=lambda: MessageTemplate(DEFAULT_EXCEPTION_MESSAGE)
    )
    exception_template: str = DEFAULT_EXCEPTION_TEMPLATE

    def __post_init__(self) -> None:
        # Accept plain strings so the policy can be built straight from settings.
        if not isinstance(self.message_template, MessageTemplate):
            object.__setattr__(
                self, "message_template", MessageTemplate(self.message_template)
            )
        if not self.exception_template:
            msg = "exception_template must be a non-empty template name"
            raise ValueError(msg)

    @classmethod
    def from_settings(cls, settings: Any) -> "ExceptionStrategyConfig":
        """Build the policy from an object exposing the error page settings."""
        return cls(
            display_exceptions=settings.display_exceptions,
            message_template=MessageTemplate(settings.default_exception_message),
            exception_template=settings.exception_template,
        )


class ExceptionStrategy:
    """Error listener that reports exceptions and prepares the error page.

    Args:
        reporter: Error tracker the exceptions are sent to.
        config: Error page policy. Defaults to ExceptionStrategyConfig().
    """

    def __init__(
        self,
        reporter: ErrorReporterPort,
        config: Optional[ExceptionStrategyConfig] = None,
    ) -> None:
        self._reporter = reporter
        self._config = config or ExceptionStrategyConfig()
        self._handles: list[ListenerHandle] = []

    @property
    def config(self) -> ExceptionStrategyConfig:
        return self._config

    @property
    def display_exceptions(self) -> bool:
        return self._config.display_exceptions

    @property
    def message_template(self) -> MessageTemplate:
        return self._config.message_template

    @property
    def exception_template(self) -> str:
        return self._config.exception_template

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def attach(self, events: EventManager, priority: int = 1) -> None:
        """Listen on both the dispatch.error and render.error hooks."""
        self._handles.append(events.attach(DISPATCH_ERROR, self.on_error, priority))
        self._handles.append(events.attach(RENDER_ERROR, self.on_error, priority))

    def detach(self, events: EventManager) -> None:
        """Remove every listener this strategy attached to ``events``."""
        remaining = []
        for handle in self._handles:
            if not events.detach(handle):
                remaining.append(handle)
        self._handles = remaining

    def on_error(self, event: ErrorEvent) -> ErrorOutcome:
        """Listener entry point used by the event manager."""
        return self.handle(event)

    # ------------------------------------------------------------------
    # Policy
    # ------------------------------------------------------------------

    def handle(self, event: ErrorEvent) -> ErrorOutcome:
        """Decide the result and response for a dispatch error.

        Returns the event's own result and response when there is nothing
        to do. Errors from the reporter propagate.
        """
        if not event.error:
            return event.unchanged()

        # Another listener already produced a response; keep it.
        if isinstance(event.result, HttpResponse):
            return event.unchanged()

        if _as_error_code(event.error) in ROUTING_ERRORS:
            logger.debug("Leaving routing error %s to its handler", event.error)
            return event.unchanged()

        # Hosts also raise plain errors (e.g. unauthorized) with no exception.
        if event.exception is None:
            logger.debug("No exception attached to %s, nothing to report", event.error)
            return event.unchanged()

        report_id = self._reporter.report(event.exception)
        if report_id:
            logger.error(
                "Reported %s on %s (report_id=%s)",
                type(event.exception).__name__,
                event.name,
                report_id,
            )
        else:
            logger.warning(
                "Error tracker returned no report id for %s on %s",
                type(event.exception).__name__,
                event.name,
            )

        model = ViewModel(
            variables={
                "message": self._config.message_template.render(report_id),
                "exception": event.exception,
                "display_exceptions": self._config.display_exceptions,
            },
            template=self._config.exception_template,
        )

        return ErrorOutcome(
            result=model,
            response=_error_response(event.response),
            report_id=None if report_id is None else str(report_id),
            handled=True,
        )


def _as_error_code(error: Any) -> Any:
    try:
        return ErrorCode(error)
    except ValueError:
        return error


def _error_response(response: Optional[HttpResponse]) -> HttpResponse:
    """500 for a missing or 200 response; any other status is deliberate."""
    if response is None:
        return HttpResponse(status_code=HTTP_500)
    if response.status_code == HTTP_200:
        return response.with_status(HTTP_500)
    return response
