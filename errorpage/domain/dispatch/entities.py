"""
Domain entities for the dispatch bounded context.

Entities describe a failed dispatch and what the error strategy
decided to do about it. They contain no framework imports and no IO.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Optional, Union

HTTP_200 = 200
HTTP_500 = 500


class ErrorCode(str, Enum):
    """Error codes the host raises dispatch errors under."""

    CONTROLLER_NOT_FOUND = "error-controller-not-found"
    CONTROLLER_INVALID = "error-controller-invalid"
    ROUTER_NO_MATCH = "error-router-no-match"
    EXCEPTION = "error-exception"


# Routing-layer failures are left to whichever handler owns them.
ROUTING_ERRORS = frozenset(
    {
        ErrorCode.CONTROLLER_NOT_FOUND,
        ErrorCode.CONTROLLER_INVALID,
        ErrorCode.ROUTER_NO_MATCH,
    }
)


@dataclass(frozen=True)
class HttpResponse:
    """The status and headers the host will send for a failed request."""

    status_code: int = HTTP_200
    headers: dict[str, str] = field(default_factory=dict)

    def with_status(self, status_code: int) -> "HttpResponse":
        return replace(self, status_code=status_code)


@dataclass(frozen=True)
class ViewModel:
    """Variables plus the name of the template that renders them."""

    variables: dict[str, Any] = field(default_factory=dict)
    template: Optional[str] = None

    def get(self, name: str, default: Any = None) -> Any:
        return self.variables.get(name, default)


Result = Union[HttpResponse, ViewModel]


@dataclass(frozen=True)
class ErrorOutcome:
    """What an error listener decided.

    Attributes:
        result: The result the host should render (unchanged on no-op).
        response: The response the host should send (unchanged on no-op).
        report_id: Identifier returned by the error tracker, if reported.
        handled: True when the listener acted on the event.
    """

    result: Optional[Result] = None
    response: Optional[HttpResponse] = None
    report_id: Optional[str] = None
    handled: bool = False


@dataclass(frozen=True)
class ErrorEvent:
    """A single dispatch or render failure.

    Attributes:
        name: Hook the event was raised under (dispatch.error, render.error).
        error: Error code. Anything outside ErrorCode is an unrecognized code.
        exception: The exception that caused the failure, if there was one.
        result: Result produced so far by the host or earlier listeners.
        response: Response produced so far, if any.
        params: Free-form host parameters (request path, method...).
        report_id: Error tracker id, once a listener has reported the exception.
    """

    name: str
    error: Optional[Union[ErrorCode, str]] = None
    exception: Optional[BaseException] = None
    result: Optional[Result] = None
    response: Optional[HttpResponse] = None
    params: dict[str, Any] = field(default_factory=dict)
    report_id: Optional[str] = None

    def unchanged(self) -> ErrorOutcome:
        """Outcome that leaves this event exactly as it is."""
        return ErrorOutcome(result=self.result, response=self.response)

    def with_outcome(self, outcome: ErrorOutcome) -> "ErrorEvent":
        """Return a copy of this event carrying a listener's outcome."""
        report_id = outcome.report_id if outcome.report_id is not None else self.report_id
        return replace(
            self,
            result=outcome.result,
            response=outcome.response,
            report_id=report_id,
        )
