"""
Tracking client: opens/closes sessions and sends backend events to the collector.
Each network operation is one POST with fixed auth headers; there is no
queueing, batching or retry.
"""

import logging
import time
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Callable, Optional, Union
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from log_tracker.errors import (
    GENERIC_ERROR_MESSAGE,
    ConfigurationError,
    LifecycleError,
    MalformedResponseError,
    ServiceError,
)
from log_tracker.models.config import TrackerConfig
from log_tracker.models.events import (
    ERROR_EVENT_TYPES,
    POINT_IN_TIME_DURATION,
    SUCCESS_EVENT_TYPES,
    BackendEvent,
    BackendEventRequest,
    EventResponse,
    EventType,
    JsonObject,
)
from log_tracker.models.sessions import (
    DEFAULT_SESSION_TIMEOUT_MINUTES,
    SessionEndRequest,
    SessionStartRequest,
    SessionStartResponse,
    SessionType,
    TrackSessionOptions,
    format_timestamp,
)
from log_tracker.session_store import SESSION_COOKIE_NAME, SessionStore, maybe_await

logger = logging.getLogger(__name__)

SESSIONS_PATH = "/track/sessions"
BACKEND_EVENTS_PATH = "/track/events/backend"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TrackingClient:
    """
    Client for one collector application.

    Args:
        config: TrackerConfig or a mapping with url, application_id, public_key
            and optionally api_prefix
        session_store: Optional store for the current session id
        http_client: Optional httpx.AsyncClient; the caller keeps ownership.
            Without one, each request opens a short-lived client.
        clock: Monotonic clock in seconds, used to time backend events
        now: Wall clock returning an aware datetime, used for timestamps
    """

    def __init__(
        self,
        config: Union[TrackerConfig, Mapping],
        session_store: Optional[SessionStore] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        clock: Optional[Callable[[], float]] = None,
        now: Optional[Callable[[], datetime]] = None,
    ):
        if isinstance(config, Mapping):
            try:
                config = TrackerConfig(**config)
            except ValidationError as e:
                raise ConfigurationError(f"Invalid tracker configuration: {e}") from e
        if not isinstance(config, TrackerConfig):
            raise ConfigurationError(f"Expected TrackerConfig, got {type(config).__name__}")

        missing = config.missing_fields()
        if missing:
            raise ConfigurationError(f"Missing required configuration: {', '.join(missing)}")

        self.config = config
        self.session_store = session_store
        self._base_url = config.base_url
        self._http_client = http_client
        self._clock = clock or time.perf_counter
        self._now = now or _utcnow

    # ── Request helpers ───────────────────────────────────────────────

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-application-id": self.config.application_id,
            "x-public-key": self.config.public_key,
        }

    def _clock_ms(self) -> float:
        return self._clock() * 1000

    def _timestamp(self) -> str:
        return format_timestamp(self._now())

    async def _post(self, path: str, body: BaseModel) -> httpx.Response:
        url = f"{self._base_url}{path}"
        payload = body.model_dump(mode="json", by_alias=True)
        logger.debug(f"POST {url}")
        if self._http_client is not None:
            return await self._http_client.post(url, json=payload, headers=self._headers())
        async with httpx.AsyncClient() as client:
            return await client.post(url, json=payload, headers=self._headers())

    def _handle_response(self, response: httpx.Response) -> Any:
        """Decode the body and raise ServiceError on non-2xx status."""
        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.is_success:
            message = data.get("error") if isinstance(data, dict) else None
            error = ServiceError(str(message) if message else GENERIC_ERROR_MESSAGE, response.status_code)
            logger.warning(f"Collector error: status={error.status_code} message={error.message}")
            raise error

        return data

    def _parse(self, response: httpx.Response, model: type[BaseModel], field: str) -> BaseModel:
        data = self._handle_response(response)
        if not isinstance(data, dict):
            logger.warning(f"Collector returned a non-JSON object body (status={response.status_code})")
            raise MalformedResponseError(
                "Response body is not a JSON object", response.status_code, field
            )
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Collector response missing {field} (status={response.status_code})")
            raise MalformedResponseError(
                f"Response body lacks a valid {field}", response.status_code, field
            ) from e

    # ── Sessions ──────────────────────────────────────────────────────

    async def start_session(
        self,
        session_type: Union[SessionType, str],
        user: str,
        link_id: Optional[str] = None,
        metadata: Optional[JsonObject] = None,
        timeout: float = DEFAULT_SESSION_TIMEOUT_MINUTES,
    ) -> str:
        """
        Open a session on the collector.

        Args:
            session_type: pre-authentication, authenticated or refresh-authentication
            user: Opaque, non-empty user identifier
            link_id: Optional id of a prior session or event to correlate with
            metadata: Optional JSON object
            timeout: Minutes until the collector expires the session

        Returns:
            The collector-assigned session id, also written to the session
            store when one is configured.
        """
        options = TrackSessionOptions(link_id=link_id, metadata=metadata, timeout=timeout)
        started_at = self._now()
        request = SessionStartRequest(
            type=session_type,
            user=user,
            link_id=options.link_id,
            metadata=options.metadata,
            timestamp=format_timestamp(started_at),
            end_at=format_timestamp(started_at + options.expires_after()),
        )

        response = await self._post(SESSIONS_PATH, request)
        result = self._parse(response, SessionStartResponse, "session_id")

        if self.session_store is not None:
            await maybe_await(self.session_store.set(SESSION_COOKIE_NAME, result.session_id))

        logger.info(
            f"Session started: session_id={result.session_id} type={request.type.value} "
            f"user={user} end_at={request.end_at}"
        )
        return result.session_id

    async def end_session(self, session_id: Optional[str] = None) -> None:
        """
        Close a session.

        Without session_id the id is read from the session store. Once the
        collector has accepted the close, the store is cleared if it holds
        this session id.
        """
        implicit = session_id is None
        if implicit:
            if self.session_store is None:
                raise LifecycleError("No session id given and no session store configured")
            session_id = await maybe_await(self.session_store.get(SESSION_COOKIE_NAME))
            if not session_id:
                raise LifecycleError("No open session in the session store")
        elif not session_id:
            raise ValueError("session_id must be a non-empty string")

        request = SessionEndRequest(timestamp=self._timestamp())
        response = await self._post(f"{SESSIONS_PATH}/{quote(session_id, safe='')}/end", request)
        self._handle_response(response)

        if self.session_store is not None:
            stored_id = session_id if implicit else await maybe_await(self.session_store.get(SESSION_COOKIE_NAME))
            if stored_id == session_id:
                await maybe_await(self.session_store.clear(SESSION_COOKIE_NAME))

        logger.info(f"Session ended: session_id={session_id}")

    # ── Backend events ────────────────────────────────────────────────

    def start_backend_event(
        self,
        event_type: Union[EventType, str],
        session_id: str,
        link_id: Optional[str] = None,
        metadata: Optional[JsonObject] = None,
    ) -> BackendEvent:
        """
        Start timing a backend event. No network call is made; pass the
        returned handle to end_backend_event.
        """
        return BackendEvent(
            session_id=session_id,
            type=event_type,
            link_id=link_id,
            metadata=metadata,
            start_time=self._clock_ms(),
        )

    async def end_backend_event(self, event: BackendEvent) -> str:
        """Close a handle from start_backend_event and send it. Returns the event id."""
        event.begin_close()
        duration = max(0.0, self._clock_ms() - event.start_time)
        try:
            event_id = await self._send_event(
                event.type, event.session_id, event.link_id, event.metadata, duration
            )
        except BaseException:
            event.reopen()
            raise

        event.mark_closed(event_id)
        return event_id

    async def track_backend_error_event(
        self,
        event_type: Union[EventType, str],
        session_id: str,
        link_id: Optional[str] = None,
        metadata: Optional[JsonObject] = None,
    ) -> str:
        """Send a point-in-time error event. Returns the event id."""
        event_type = self._check_category(event_type, ERROR_EVENT_TYPES, "error")
        return await self._send_event(event_type, session_id, link_id, metadata, POINT_IN_TIME_DURATION)

    async def track_backend_success_event(
        self,
        event_type: Union[EventType, str],
        session_id: str,
        link_id: Optional[str] = None,
        metadata: Optional[JsonObject] = None,
    ) -> str:
        """Send a point-in-time success event. Returns the event id."""
        event_type = self._check_category(event_type, SUCCESS_EVENT_TYPES, "success")
        return await self._send_event(event_type, session_id, link_id, metadata, POINT_IN_TIME_DURATION)

    @staticmethod
    def _check_category(event_type, allowed: frozenset, category: str) -> EventType:
        event_type = EventType(event_type)
        if event_type not in allowed:
            names = ", ".join(sorted(t.value for t in allowed))
            raise ValueError(f"{event_type.value} is not a {category} event type (expected one of: {names})")
        return event_type

    async def _send_event(
        self,
        event_type: EventType,
        session_id: str,
        link_id: Optional[str],
        metadata: Optional[JsonObject],
        duration: float,
    ) -> str:
        request = BackendEventRequest(
            session_id=session_id,
            type=event_type,
            link_id=link_id,
            metadata=metadata,
            duration=duration,
            timestamp=self._timestamp(),
        )
        response = await self._post(BACKEND_EVENTS_PATH, request)
        result = self._parse(response, EventResponse, "event_id")
        logger.info(
            f"Backend event sent: event_id={result.event_id} type={request.type.value} "
            f"session_id={session_id} duration={duration:.1f}ms"
        )
        return result.event_id


def create_tracking_client(config: Union[TrackerConfig, Mapping], **kwargs) -> TrackingClient:
    """Build a TrackingClient; keyword arguments are passed through."""
    return TrackingClient(config, **kwargs)
