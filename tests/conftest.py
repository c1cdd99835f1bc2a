"""Shared fixtures: a stub collector, fake clocks and a wired client."""

import json
from datetime import datetime, timezone

import httpx
import pytest
import pytest_asyncio

from log_tracker.client import TrackingClient
from log_tracker.models.config import TrackerConfig
from log_tracker.session_store import InMemorySessionStore

FIXED_NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


class StubCollector:
    """Records every request and answers from a queue of canned responses."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._responses: list = []

    def respond(self, status_code: int = 200, json=None, text=None):
        if text is not None:
            self._responses.append(httpx.Response(status_code, text=text))
        else:
            self._responses.append(httpx.Response(status_code, json=json))

    def fail(self, exc: Exception):
        self._responses.append(exc)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            return httpx.Response(200, json={})
        resp = self._responses.pop(0)
        if isinstance(resp, Exception):
            raise resp
        return resp

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def body(self, index: int = -1) -> dict:
        return json.loads(self.requests[index].content)


class FakeClock:
    """Monotonic clock in seconds that only moves when told to."""

    def __init__(self, start: float = 100.0):
        self.value = start

    def __call__(self) -> float:
        return self.value

    def advance(self, seconds: float):
        self.value += seconds


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def tracker_config():
    return TrackerConfig(
        url="https://collector.test",
        application_id="app-123",
        public_key="pk_test_abc",
    )


@pytest.fixture
def collector():
    return StubCollector()


@pytest_asyncio.fixture
async def http_client(collector):
    async with httpx.AsyncClient(transport=httpx.MockTransport(collector.handler)) as client:
        yield client


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def session_store():
    return InMemorySessionStore()


@pytest.fixture
def client(tracker_config, http_client, fake_clock):
    return TrackingClient(
        tracker_config,
        http_client=http_client,
        clock=fake_clock,
        now=lambda: FIXED_NOW,
    )


@pytest.fixture
def stored_client(tracker_config, http_client, fake_clock, session_store):
    return TrackingClient(
        tracker_config,
        session_store=session_store,
        http_client=http_client,
        clock=fake_clock,
        now=lambda: FIXED_NOW,
    )
