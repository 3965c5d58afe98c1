"""Shared fixtures: a TestClient wired to a stubbed rendering service."""
import httpx
import pytest
from fastapi.testclient import TestClient

from sitesnap.main import app, get_screenshot_service
from sitesnap.screenshot_service import ScreenshotService

PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x01"


class StubUpstream:
    """Records outbound calls and answers them with canned responses."""

    def __init__(self):
        self.calls = []
        self.verify_calls = []
        self.response = httpx.Response(200, content=PNG_BYTES, headers={"Content-Type": "image/png"})
        self.verify_response = httpx.Response(200, json={"success": True})
        self.error = None
        self.verify_error = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/siteverify"):
            self.verify_calls.append(request)
            if self.verify_error is not None:
                raise self.verify_error
            return self.verify_response
        self.calls.append(request)
        if self.error is not None:
            raise self.error
        return self.response

    @property
    def last_params(self):
        return dict(self.calls[-1].url.params)


@pytest.fixture(autouse=True)
def env(monkeypatch):
    monkeypatch.setenv("SCREENSHOTONE_API_KEY", "test-key")
    monkeypatch.setenv("SCREENSHOTONE_API_URL", "https://api.screenshotone.com/take")
    monkeypatch.delenv("CF_TURNSTILE_SECRET_KEY", raising=False)
    monkeypatch.setenv("CF_TURNSTILE_SITE_KEY", "site-key")


@pytest.fixture
def upstream():
    return StubUpstream()


@pytest.fixture
def client(upstream):
    service = ScreenshotService(transport=httpx.MockTransport(upstream))
    app.dependency_overrides[get_screenshot_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def capture_body():
    return {
        "url": "https://example.com",
        "width": 1920,
        "height": 1080,
        "fullPage": True,
        "cfCaptchaToken": "token-123",
    }
