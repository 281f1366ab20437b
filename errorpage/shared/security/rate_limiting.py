"""
Rate limiting configuration and setup.

Uses slowapi to enforce a default per-client rate limit on every route.
Each application gets its own limiter, so counters are never shared
between app instances.
"""

from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.requests import Request
from starlette.responses import JSONResponse

from errorpage.interfaces.schemas import ErrorResponse

HTTP_429 = 429


def build_limiter(default_limit: str) -> Limiter:
    """Create a limiter applying ``default_limit`` (e.g. "60/minute") per client."""
    return Limiter(key_func=get_remote_address, default_limits=[default_limit])


def rate_limit_exceeded_handler(
    _request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    """Answer a rate-limited request with the standard error body.

    Rate limiting is not a dispatch error: it never reaches the error
    tracker and never renders the error page.
    """
    body = ErrorResponse(error="Rate limit exceeded", detail=str(exc.detail))
    return JSONResponse(status_code=HTTP_429, content=body.model_dump(exclude_none=True))
