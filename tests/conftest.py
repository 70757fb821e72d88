"""Pytest configuration and fixtures."""

import httpx
import pytest
from fastapi.testclient import TestClient

from recipe_creator.api.dependencies import get_gemini_service
from recipe_creator.config import Settings
from recipe_creator.main import create_app
from recipe_creator.services.gemini_service import GeminiService


@pytest.fixture
def anyio_backend():
    """Run async tests on asyncio only."""
    return "asyncio"


@pytest.fixture
def test_settings(monkeypatch):
    """Settings with a fake Gemini key, isolated from the real environment."""
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    return Settings(_env_file=None, gemini_api_key="test-gemini-key", log_level="WARNING")


@pytest.fixture
def unconfigured_settings(monkeypatch):
    """Settings without a Gemini key."""
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    return Settings(_env_file=None, gemini_api_key=None, log_level="WARNING")


@pytest.fixture
def gemini_calls():
    """Requests that reached the stubbed Gemini endpoint."""
    return []


@pytest.fixture
def gemini_reply():
    """Build a generateContent success body carrying the given model text."""

    def factory(text, status_code=200):
        return httpx.Response(
            status_code,
            json={"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]},
        )

    return factory


@pytest.fixture
def make_gemini_service(test_settings, gemini_calls):
    """
    Build a GeminiService whose HTTP calls hit a MockTransport.

    `response` is returned for every call; `exc` (if given) is raised instead.
    `on_call` runs with each request before answering.
    """

    def factory(response=None, exc=None, settings=None, on_call=None):
        def handler(request: httpx.Request) -> httpx.Response:
            gemini_calls.append(request)
            if on_call is not None:
                on_call(request)
            if exc is not None:
                raise exc
            return response

        return GeminiService(settings or test_settings, transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture
def app(test_settings):
    """Fresh application (and session store) per test."""
    application = create_app(test_settings)
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """Create test client."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def use_gemini(app):
    """Route the app's Gemini calls through the given service."""

    def install(service: GeminiService) -> None:
        app.dependency_overrides[get_gemini_service] = lambda: service

    return install
