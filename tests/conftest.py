"""Shared fixtures: the app with settings and upstream HTTP replaced by test doubles."""

import httpx
import pytest
from fastapi.testclient import TestClient

from tripcompanion.core.config import Settings, get_settings
from tripcompanion.core.http_client import get_http_client
from tripcompanion.main import app


class Upstream:
    """Records outbound requests and answers them with a canned handler."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.handler = lambda request: httpx.Response(500, json={"error": {"message": "no handler"}})

    def respond_with(self, handler):
        self.handler = handler

    def respond_json(self, status_code: int = 200, json=None):
        self.handler = lambda request: httpx.Response(status_code, json=json)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)


def make_settings(**keys) -> Settings:
    values = {"GEMINI_API_KEY": None, "OPENAI_API_KEY": None, "GOOGLE_MAPS_API_KEY": None}
    values.update(keys)
    return Settings(_env_file=None, **values)


@pytest.fixture
def upstream():
    return Upstream()


@pytest.fixture
def configure(upstream):
    """Call with API keys to get a TestClient wired to those settings."""

    def _configure(**keys) -> TestClient:
        settings = make_settings(**keys)

        async def override_http_client():
            async with httpx.AsyncClient(transport=httpx.MockTransport(upstream)) as client:
                yield client

        app.dependency_overrides[get_settings] = lambda: settings
        app.dependency_overrides[get_http_client] = override_http_client
        return TestClient(app)

    yield _configure
    app.dependency_overrides.clear()
