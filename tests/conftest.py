"""
Shared fixtures for the errorpage test suite.

Nothing here talks to Sentry: tests that need an error tracker use
RecordingReporter, which hands out predictable report ids.
"""

from typing import Optional

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from errorpage.core.config import Settings
from errorpage.domain.dispatch.ports import ErrorReporterPort
from errorpage.main import create_app


class RecordingReporter(ErrorReporterPort):
    """Error tracker double that records every reported exception."""

    def __init__(self, report_id: Optional[str] = "evt-1234") -> None:
        self.report_id = report_id
        self.reported: list[BaseException] = []

    def report(self, exception: BaseException) -> Optional[str]:
        self.reported.append(exception)
        return self.report_id


class FailingReporter(ErrorReporterPort):
    """Error tracker double whose transport is down."""

    def report(self, exception: BaseException) -> Optional[str]:
        raise ConnectionError("error tracker unreachable")


class BoomError(RuntimeError):
    """Raised by the test routes."""


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        version="9.9.9",
        log_level="WARNING",
        default_exception_message="Oops id=%s",
    )


def add_test_routes(app: FastAPI) -> None:
    """Routes that fail in the ways the error handlers must cope with."""

    @app.get("/boom")
    def boom() -> dict:
        raise BoomError("kaboom <script>")

    @app.get("/forbidden")
    def forbidden() -> dict:
        raise HTTPException(status_code=403, detail="Forbidden")

    @app.get("/ok")
    def ok() -> dict:
        return {"ok": True}


@pytest.fixture
def app(settings: Settings, reporter: RecordingReporter) -> FastAPI:
    application = create_app(settings=settings, tracker=reporter)
    add_test_routes(application)
    return application


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    # Starlette re-raises unhandled exceptions after the 500 handler ran.
    return TestClient(app, raise_server_exceptions=False)
