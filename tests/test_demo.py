"""Tests for the python -m log_tracker demo run."""

import json

import httpx
import pytest

from log_tracker.__main__ import build_store, parse_args, run_demo
from log_tracker.client import TrackingClient
from log_tracker.redis_store import RedisSessionStore
from log_tracker.session_store import InMemorySessionStore


def routing_handler(requests: list):
    """Answer like a collector would, by path."""

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        path = request.url.path
        if path.endswith("/track/sessions"):
            return httpx.Response(200, json={"session_id": "S-demo"})
        if path.endswith("/track/events/backend"):
            return httpx.Response(200, json={"event_id": f"E{len(requests)}"})
        return httpx.Response(200, json={})

    return handler


def test_parse_args_defaults():
    args = parse_args([])
    assert args.user.startswith("demo_user_")
    assert args.session_type == "authenticated"
    assert args.timeout > 0
    assert not args.redis


def test_build_store():
    assert isinstance(build_store(parse_args([])), InMemorySessionStore)
    store = build_store(parse_args(["--redis", "--timeout", "10"]))
    assert isinstance(store, RedisSessionStore)
    assert store.ttl_seconds == 600


@pytest.mark.asyncio
async def test_run_demo_full_lifecycle(tracker_config):
    requests = []
    args = parse_args(["--user", "user-42", "--timeout", "5"])
    store = InMemorySessionStore()

    async with httpx.AsyncClient(transport=httpx.MockTransport(routing_handler(requests))) as http_client:
        client = TrackingClient(tracker_config, session_store=store, http_client=http_client)
        await run_demo(client, args)

    paths = [r.url.path for r in requests]
    assert paths == [
        "/api/track/sessions",
        "/api/track/events/backend",
        "/api/track/events/backend",
        "/api/track/sessions/S-demo/end",
    ]
    timed = json.loads(requests[1].content)
    marker = json.loads(requests[2].content)
    assert timed["type"] == "api_call"
    assert timed["duration"] >= 0
    assert marker["type"] == "api_success"
    assert marker["duration"] == 1
    assert marker["linkId"] == "E2"
    assert store.values == {}
