"""
Tests for the FastAPI error handlers.

Runs the full application with a recording error tracker and checks
what a client sees for each kind of failure.
"""

from fastapi.testclient import TestClient

from errorpage.core.config import Settings
from errorpage.domain.dispatch.entities import ErrorOutcome, HttpResponse
from errorpage.domain.dispatch.events import DISPATCH_ERROR
from errorpage.interfaces.views import TemplateRegistry
from errorpage.main import create_app
from tests.conftest import BoomError, FailingReporter, RecordingReporter, add_test_routes

JSON = {"Accept": "application/json"}


def _client(settings: Settings, tracker, templates=None) -> TestClient:
    app = create_app(settings=settings, tracker=tracker, templates=templates)
    add_test_routes(app)
    return TestClient(app, raise_server_exceptions=False)


class TestUnhandledException:
    """Unhandled exceptions are reported and get the error page."""

    def test_error_page_with_report_id(self, client, reporter) -> None:
        response = client.get("/boom")

        assert response.status_code == 500
        assert response.headers["content-type"].startswith("text/html")
        assert "Oops id=evt-1234" in response.text
        assert len(reporter.reported) == 1
        assert isinstance(reporter.reported[0], BoomError)

    def test_exception_hidden_by_default(self, client) -> None:
        response = client.get("/boom")
        assert "kaboom" not in response.text
        assert "BoomError" not in response.text

    def test_exception_shown_when_enabled(self, settings, reporter) -> None:
        debug_settings = settings.model_copy(update={"display_exceptions": True})
        response = _client(debug_settings, reporter).get("/boom")
        assert response.status_code == 500
        assert "BoomError" in response.text
        assert "kaboom &lt;script&gt;" in response.text

    def test_json_when_client_asks_for_it(self, client) -> None:
        response = client.get("/boom", headers=JSON)
        assert response.status_code == 500
        assert response.json() == {
            "error": "Internal server error",
            "detail": "Oops id=evt-1234",
            "report_id": "evt-1234",
        }

    def test_reporter_failure_is_not_swallowed(self, settings) -> None:
        response = _client(settings, FailingReporter()).get("/boom")
        assert response.status_code == 500
        assert "Oops" not in response.text

    def test_response_result_from_earlier_listener(self, app, reporter) -> None:
        redirect = HttpResponse(status_code=303, headers={"Location": "/ok"})
        app.state.events.attach(
            DISPATCH_ERROR,
            lambda event: ErrorOutcome(result=redirect, response=redirect, handled=True),
            priority=10,
        )
        client = TestClient(app, raise_server_exceptions=False, follow_redirects=False)

        response = client.get("/boom")

        assert response.status_code == 303
        assert response.headers["location"] == "/ok"
        assert reporter.reported == []


class TestRenderFailure:
    """A broken error template fires render.error and falls back to JSON."""

    def test_render_error_is_reported(self, settings) -> None:
        reporter = RecordingReporter()
        templates = TemplateRegistry()

        def broken(variables):
            raise LookupError("template missing block")

        templates.register("error", broken)
        response = _client(settings, reporter, templates).get("/boom")

        assert response.status_code == 500
        assert response.json()["detail"] == "Oops id=evt-1234"
        assert [type(e) for e in reporter.reported] == [BoomError, LookupError]

    def test_unknown_template_name(self, settings) -> None:
        reporter = RecordingReporter()
        custom = settings.model_copy(update={"exception_template": "errors/500"})
        response = _client(custom, reporter).get("/boom")

        assert response.status_code == 500
        assert response.json()["report_id"] == "evt-1234"
        assert len(reporter.reported) == 2


class TestRoutingErrors:
    """Routing failures are not reported and keep their status."""

    def test_not_found(self, client, reporter) -> None:
        response = client.get("/does-not-exist")
        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}
        assert reporter.reported == []

    def test_method_not_allowed(self, client, reporter) -> None:
        response = client.post("/ok")
        assert response.status_code == 405
        assert "GET" in response.headers["allow"]
        assert reporter.reported == []

    def test_deliberate_http_error(self, client, reporter) -> None:
        response = client.get("/forbidden")
        assert response.status_code == 403
        assert response.json() == {"error": "Forbidden"}
        assert reporter.reported == []


class TestSecurityHeaders:
    """Security headers on normal and handled error responses."""

    def test_headers_on_success(self, client) -> None:
        response = client.get("/ok")
        assert response.headers["x-content-type-options"] == "nosniff"
        assert response.headers["x-frame-options"] == "DENY"

    def test_headers_on_not_found(self, client) -> None:
        response = client.get("/does-not-exist")
        assert "content-security-policy" in response.headers
