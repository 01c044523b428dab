from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient

from llmproxy.app import create_app
from llmproxy.config import Settings


class FakeUpstream:
    """Stands in for UpstreamClient and records every outbound call."""

    def __init__(self, response: Any = None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def post_json(self, url: str, *, token: str, payload: dict[str, Any], label: str) -> Any:
        self.calls.append({"url": url, "token": token, "payload": payload, "label": label})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def settings() -> Settings:
    return Settings(groq_api_key="gsk-test", huggingface_api_key="hf-test")


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream(response={"choices": [{"message": {"content": "hello"}}]})


@pytest.fixture
def make_client():
    def _make(settings: Settings, upstream: FakeUpstream) -> TestClient:
        return TestClient(create_app(settings=settings, upstream=upstream))

    return _make


@pytest.fixture
def client(make_client, settings, upstream) -> TestClient:
    return make_client(settings, upstream)
