import os
from datetime import UTC, datetime

import httpx
import pytest
from fastapi.testclient import TestClient

# Set test environment variables before importing app
# Force dev mode for default test app; production validation tests override
os.environ["APP_ENV"] = "dev"
os.environ.setdefault("MAILGUN_API_KEY", "key-test")
os.environ.setdefault("MAILGUN_API_BASE_URL", "https://api.mailgun.test/v3/mg.example.com")
os.environ.setdefault("MAILGUN_DRY_RUN", "false")
os.environ.setdefault("MAILGUN_TEST_MODE", "false")

from app.api.dependencies import get_http_client, get_request_time
from app.core.config import Settings, get_settings
from app.main import app

FROZEN_NOW = datetime(2011, 10, 10, 18, 2, 0, tzinfo=UTC)


class MailgunStub:
    """Records requests sent to Mailgun and answers with a configurable status."""

    def __init__(self):
        self.status_code = 200
        self.json = {"id": "<20111010180200.1.test@mg.example.com>", "message": "Queued. Thank you."}
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.json)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def settings():
    """Explicit test settings (never read from the developer's .env)."""
    return Settings(
        _env_file=None,
        mailgun_api_key="key-test",
        mailgun_api_base_url="https://api.mailgun.test/v3/mg.example.com",
    )


@pytest.fixture
def mailgun():
    return MailgunStub()


@pytest.fixture(scope="function")
def client(settings, mailgun):
    """Create a test client with settings, Mailgun transport and clock overridden."""

    async def override_get_http_client():
        async with mailgun.client() as http_client:
            yield http_client

    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_http_client] = override_get_http_client
    app.dependency_overrides[get_request_time] = lambda: FROZEN_NOW
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
