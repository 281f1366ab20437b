"""
Application entry point.

Creates the FastAPI application and wires together:
- Logging configuration
- Sentry initialization
- Dispatch error handling (event manager, exception strategy, error tracker)
- Error handlers (FastAPI exceptions to dispatch error events)
- Security middleware (headers, rate limiting)
- Routers

No business logic belongs here.
"""

from typing import Optional

from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from errorpage.core.config import Settings, get_settings
from errorpage.domain.dispatch.ports import ErrorReporterPort
from errorpage.infrastructure.dispatch.sentry_reporter import init_sentry
from errorpage.interfaces.dependencies import build_error_handling
from errorpage.interfaces.health import router as health_router
from errorpage.interfaces.views import TemplateRegistry
from errorpage.shared.errors.handlers import register_error_handlers
from errorpage.shared.logging import configure_logging
from errorpage.shared.security.headers import SecurityHeadersMiddleware
from errorpage.shared.security.rate_limiting import (
    build_limiter,
    rate_limit_exceeded_handler,
)


def create_app(
    settings: Optional[Settings] = None,
    tracker: Optional[ErrorReporterPort] = None,
    templates: Optional[TemplateRegistry] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    This is the composition root of the application.

    Args:
        settings: Application settings. Defaults to the cached environment settings.
        tracker: Error tracker for reported exceptions. Defaults to Sentry.
        templates: View templates for error pages. Defaults to the built-in ones.

    Returns:
        A fully configured FastAPI application instance.
    """
    settings = settings or get_settings()
    configure_logging(level=settings.log_level, debug=settings.debug)
    if tracker is None:
        init_sentry(settings)

    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    app.state.settings = settings

    # --- Dispatch error handling ---
    stack = build_error_handling(settings, tracker=tracker)
    app.state.events = stack.events
    app.state.exception_strategy = stack.strategy

    # --- Rate Limiting ---
    app.state.limiter = build_limiter(settings.rate_limit_default)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # --- Security Middleware ---
    app.add_middleware(SecurityHeadersMiddleware)

    # --- Error Handlers ---
    register_error_handlers(app, stack.events, templates)

    # --- Routers ---
    app.include_router(health_router, prefix="/api/v1")

    return app
