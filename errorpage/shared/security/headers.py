"""
Secure HTTP headers middleware.

Adds security-related headers to every response, error pages included.
The error page ships its stylesheet inline, so the CSP allows inline
styles and nothing else beyond 'self'.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

SECURE_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Content-Security-Policy": "default-src 'self'; style-src 'self' 'unsafe-inline'",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Set the secure headers unless a handler already chose a value."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        for header_name, header_value in SECURE_HEADERS.items():
            response.headers.setdefault(header_name, header_value)
        return response
