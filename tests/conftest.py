"""Shared fixtures for the tl;dv MCP Server tests.

Provides:
- A recording sleep so retry backoff can be asserted without waiting
- A factory building `TldvApi` against an `httpx.MockTransport`
- A sample meeting payload
"""

from __future__ import annotations

from typing import Callable, List

import httpx
import pytest
import structlog

from tldv_mcp_server.api import TldvApi


class RecordingSleep:
    """Async stand-in for `asyncio.sleep` that records requested delays."""

    def __init__(self) -> None:
        self.delays: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class Recorder:
    """Collects every request seen by the mock transport."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: List[httpx.Request] = []
        self._handler = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def make_api(sleep: RecordingSleep):
    """Build a client whose HTTP traffic goes to `handler`.

    Returns `(api, recorder)`; `recorder.requests` lists what was sent.
    """

    def _make(handler, **config):
        recorder = Recorder(handler)
        api = TldvApi(
            {"api_key": "test-key", **config},
            transport=httpx.MockTransport(recorder),
            sleep=sleep,
        )
        return api, recorder

    return _make


@pytest.fixture
def meeting_payload() -> dict:
    return {
        "id": "m1",
        "name": "Standup",
        "happenedAt": "2024-05-01T09:00:00Z",
        "url": "https://tldv.io/app/meetings/m1",
        "organizer": {"name": "Ada", "email": "ada@example.com"},
        "invitees": [{"name": "Grace", "email": "grace@example.org"}],
        "template": {"id": "t1", "label": "Daily"},
    }
