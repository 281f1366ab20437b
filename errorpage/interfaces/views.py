"""
View layer for error pages.

Maps template names to render functions and turns a ViewModel plus an
HttpResponse into a Starlette response. Only the templates the error
strategy needs live here; applications register their own with
``TemplateRegistry.register``.
"""

import html
import logging
import traceback
from typing import Any, Callable, Optional

from starlette.responses import HTMLResponse, JSONResponse, Response

from errorpage.domain.dispatch.entities import HTTP_500, HttpResponse, ViewModel
from errorpage.domain.dispatch.errors import UnknownTemplateError
from errorpage.interfaces.schemas import ErrorResponse

logger = logging.getLogger(__name__)

TemplateFunction = Callable[[dict[str, Any]], str]

_ERROR_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
body {{ font-family: sans-serif; margin: 3em auto; max-width: 48em; color: #222; }}
pre {{ background: #f4f4f4; padding: 1em; overflow-x: auto; }}
</style>
</head>
<body>
<h1>{title}</h1>
<p class="message">{message}</p>
{details}
</body>
</html>
"""


def _exception_details(exception: Optional[BaseException]) -> str:
    if exception is None:
        return ""
    trace = "".join(
        traceback.format_exception(type(exception), exception, exception.__traceback__)
    )
    return (
        "<h2>Additional information</h2>\n"
        f"<h3>{html.escape(type(exception).__name__)}</h3>\n"
        f"<p>{html.escape(str(exception))}</p>\n"
        f"<pre>{html.escape(trace)}</pre>"
    )


def render_error_page(variables: dict[str, Any]) -> str:
    """Built-in ``error`` template.

    The exception is only rendered when ``display_exceptions`` is true.
    """
    details = ""
    if variables.get("display_exceptions"):
        details = _exception_details(variables.get("exception"))
    return _ERROR_PAGE.format(
        title="An error occurred",
        message=html.escape(str(variables.get("message", ""))),
        details=details,
    )


class TemplateRegistry:
    """Template name → render function."""

    def __init__(self) -> None:
        self._templates: dict[str, TemplateFunction] = {}

    @classmethod
    def default(cls) -> "TemplateRegistry":
        registry = cls()
        registry.register("error", render_error_page)
        return registry

    def register(self, name: str, template: TemplateFunction) -> None:
        self._templates[name] = template

    def __contains__(self, name: object) -> bool:
        return name in self._templates

    def render(self, name: Optional[str], variables: dict[str, Any]) -> str:
        """Render a template.

        Raises:
            UnknownTemplateError: If nothing is registered under ``name``.
        """
        if name is None or name not in self._templates:
            raise UnknownTemplateError(str(name))
        return self._templates[name](variables)


def error_body(model: ViewModel, report_id: Optional[str] = None) -> ErrorResponse:
    """JSON body for an error view model.

    Exception details are included only when the model allows displaying them.
    """
    exception = model.get("exception")
    show = bool(model.get("display_exceptions")) and exception is not None
    return ErrorResponse(
        error="Internal server error",
        detail=model.get("message"),
        report_id=report_id,
        exception=f"{type(exception).__name__}: {exception}" if show else None,
    )


def render_view_model(
    model: ViewModel,
    response: Optional[HttpResponse],
    registry: TemplateRegistry,
    *,
    as_json: bool = False,
    report_id: Optional[str] = None,
) -> Response:
    """Render a view model into a Starlette response.

    Args:
        model: Variables and template name to render.
        response: Status and headers decided by the error listeners.
        registry: Templates available for HTML rendering.
        as_json: Render the standard JSON error body instead of HTML.
        report_id: Error tracker id, echoed in the JSON body.

    Raises:
        UnknownTemplateError: If HTML is requested for an unknown template.
    """
    status_code = response.status_code if response is not None else HTTP_500
    headers = dict(response.headers) if response is not None else {}

    if as_json:
        body = error_body(model, report_id)
        return JSONResponse(
            status_code=status_code,
            content=body.model_dump(exclude_none=True),
            headers=headers,
        )

    content = registry.render(model.template, model.variables)
    return HTMLResponse(content=content, status_code=status_code, headers=headers)
