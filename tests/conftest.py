from __future__ import annotations

from typing import Callable, List

import httpx
import pytest

API_KEY = "jina_test_key"


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    @property
    def last(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]


@pytest.fixture()
def api_key() -> str:
    return API_KEY


@pytest.fixture()
def make_transport():
    """Factory for a RecordingTransport answering with a fixed response."""

    def _make(
        body: str = "search results",
        status_code: int = 200,
        content_type: str = "text/plain",
    ) -> RecordingTransport:
        return RecordingTransport(
            lambda request: httpx.Response(
                status_code,
                text=body,
                headers={"Content-Type": content_type},
            )
        )

    return _make


@pytest.fixture(autouse=True)
def _no_dotenv_leak(monkeypatch):
    monkeypatch.delenv("JINAAI_API_KEY", raising=False)
    monkeypatch.delenv("MCP_LOG_LEVEL", raising=False)
