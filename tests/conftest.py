"""Shared fixtures for the relay, classifier and scan tests."""

from typing import Callable

import httpx
import pytest

from tests.helpers import RecordingTransport


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep a developer's .env from leaking into tests."""
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)


@pytest.fixture
def api_key(monkeypatch) -> str:
    key = "test-gemini-key"
    monkeypatch.setenv("GEMINI_API_KEY", key)
    return key


@pytest.fixture
def make_transport() -> Callable[..., RecordingTransport]:
    """Build a RecordingTransport answering every request the same way."""

    def _make(status_code: int = 200, json_body=None, text=None, exc=None):
        def handler(request: httpx.Request) -> httpx.Response:
            if exc is not None:
                raise exc
            if text is not None:
                return httpx.Response(status_code, text=text)
            return httpx.Response(status_code, json=json_body)

        return RecordingTransport(handler)

    return _make
