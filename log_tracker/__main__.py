"""
Demo run: one full session lifecycle against the configured collector.
Usage: python -m log_tracker --user demo_user --timeout 10
"""

import argparse
import asyncio
import logging
import uuid

from shared_config import configure_logging, settings
from log_tracker.client import TrackingClient
from log_tracker.errors import LogTrackerError
from log_tracker.models.config import TrackerConfig
from log_tracker.models.sessions import SessionType
from log_tracker.session_store import InMemorySessionStore

logger = logging.getLogger("log_tracker.demo")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="log_tracker", description="Send a demo session to the collector.")
    parser.add_argument("--user", default=f"demo_user_{uuid.uuid4().hex[:8]}")
    parser.add_argument(
        "--session-type",
        default=SessionType.AUTHENTICATED.value,
        choices=[t.value for t in SessionType],
    )
    parser.add_argument("--timeout", type=float, default=settings.LOG_TRACKER_SESSION_TIMEOUT_MINUTES)
    parser.add_argument("--redis", action="store_true", help="Keep the session id in Redis")
    return parser.parse_args(argv)


def build_store(args: argparse.Namespace):
    if args.redis:
        from log_tracker.redis_store import RedisSessionStore
        return RedisSessionStore(ttl_seconds=int(args.timeout * 60))
    return InMemorySessionStore()


async def run_demo(client: TrackingClient, args: argparse.Namespace) -> None:
    session_id = await client.start_session(
        args.session_type,
        args.user,
        metadata={"source": "log_tracker demo"},
        timeout=args.timeout,
    )
    logger.info(f"Opened session {session_id}")

    event = client.start_backend_event("api_call", session_id, metadata={"endpoint": "/demo"})
    await asyncio.sleep(0.05)
    event_id = await client.end_backend_event(event)
    logger.info(f"Timed api_call event {event_id}")

    success_id = await client.track_backend_success_event("api_success", session_id, link_id=event_id)
    logger.info(f"Sent api_success marker {success_id}")

    # Session id comes back from the store
    await client.end_session()
    logger.info(f"Closed session {session_id}")


def main(argv=None) -> int:
    configure_logging()
    args = parse_args(argv)
    try:
        client = TrackingClient(TrackerConfig.from_settings(), session_store=build_store(args))
        asyncio.run(run_demo(client, args))
    except LogTrackerError as e:
        logger.error(f"Demo failed ({e.kind}): {e}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
