"""
Centralized error handlers for FastAPI.

Bridges FastAPI's exception handling to the dispatch error hooks:
unhandled exceptions and routing failures become ErrorEvents, the
listeners attached to the event manager decide the result, and the
result is rendered here. No stack traces or internal details are
exposed to clients unless the error page policy allows it.
"""

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from errorpage.domain.dispatch.entities import (
    ErrorCode,
    ErrorEvent,
    HttpResponse,
    ViewModel,
)
from errorpage.domain.dispatch.events import DISPATCH_ERROR, RENDER_ERROR, EventManager
from errorpage.interfaces.schemas import ErrorResponse
from errorpage.interfaces.views import TemplateRegistry, render_view_model

logger = logging.getLogger(__name__)

HTTP_404 = 404
HTTP_405 = 405
HTTP_500 = 500

# HTTP errors the router raises, as dispatch error codes.
ROUTING_STATUS_CODES = {
    HTTP_404: ErrorCode.ROUTER_NO_MATCH,
    HTTP_405: ErrorCode.CONTROLLER_INVALID,
}


def _error_response(
    status_code: int,
    error: str,
    detail: Optional[str] = None,
    headers: Optional[dict[str, str]] = None,
) -> JSONResponse:
    """Build a consistent JSON error response."""
    body = ErrorResponse(error=error, detail=detail)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


def _wants_json(request: Request) -> bool:
    accept = request.headers.get("accept", "")
    return "application/json" in accept and "text/html" not in accept


def _request_params(request: Request) -> dict[str, Any]:
    # Path and method only; never headers or bodies.
    return {"path": request.url.path, "method": request.method}


def register_error_handlers(
    app: FastAPI,
    events: EventManager,
    registry: Optional[TemplateRegistry] = None,
) -> None:
    """Register the dispatch error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
        events: Event manager holding the dispatch/render error listeners.
        registry: Templates used to render error view models.
    """
    templates = registry or TemplateRegistry.default()

    def _render(request: Request, event: ErrorEvent) -> Optional[Response]:
        """Render what the listeners left on the event, or None if nothing."""
        result = event.result
        if isinstance(result, HttpResponse):
            return Response(status_code=result.status_code, headers=result.headers)
        if not isinstance(result, ViewModel):
            return None

        as_json = _wants_json(request)
        try:
            return render_view_model(
                result,
                event.response,
                templates,
                as_json=as_json,
                report_id=event.report_id,
            )
        except Exception as exc:
            # Any template failure, not only UnknownTemplateError, goes to render.error.
            logger.exception("Rendering template %r failed", result.template)
            render_event = events.trigger_error(
                ErrorEvent(
                    name=RENDER_ERROR,
                    error=ErrorCode.EXCEPTION,
                    exception=exc,
                    response=event.response,
                    params=event.params,
                )
            )
            if isinstance(render_event.result, ViewModel):
                return render_view_model(
                    render_event.result,
                    render_event.response,
                    templates,
                    as_json=True,
                    report_id=render_event.report_id,
                )
            return None

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> Response:
        """Routing failures go through the dispatch error hook first."""
        code = ROUTING_STATUS_CODES.get(exc.status_code)
        if code is not None:
            event = events.trigger_error(
                ErrorEvent(
                    name=DISPATCH_ERROR,
                    error=code,
                    response=HttpResponse(status_code=exc.status_code),
                    params=_request_params(request),
                )
            )
            rendered = _render(request, event)
            if rendered is not None:
                return rendered

        logger.warning(
            "HTTP %d on %s %s", exc.status_code, request.method, request.url.path
        )
        return _error_response(
            exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> Response:
        """Catch-all for unexpected errors: report, then render the error page."""
        event = events.trigger_error(
            ErrorEvent(
                name=DISPATCH_ERROR,
                error=ErrorCode.EXCEPTION,
                exception=exc,
                params=_request_params(request),
            )
        )
        rendered = _render(request, event)
        if rendered is not None:
            return rendered

        logger.error("Unexpected error: %s", type(exc).__name__, exc_info=exc)
        return _error_response(HTTP_500, "Internal server error")
