"""
log-tracker client: sessions and backend events for a remote collector.

Example:
    >>> client = TrackingClient(TrackerConfig(url=..., application_id=..., public_key=...))
    >>> session_id = await client.start_session("authenticated", "user-42", timeout=10)
    >>> event = client.start_backend_event("api_call", session_id)
    >>> event_id = await client.end_backend_event(event)
    >>> await client.end_session(session_id)
"""

from log_tracker.client import TrackingClient, create_tracking_client
from log_tracker.errors import (
    ConfigurationError,
    LifecycleError,
    LogTrackerError,
    MalformedResponseError,
    ServiceError,
    TrackingError,
)
from log_tracker.models import (
    ERROR_EVENT_TYPES,
    FRONTEND_EVENT_TYPES,
    NEUTRAL_EVENT_TYPES,
    SUCCESS_EVENT_TYPES,
    BackendEvent,
    EventType,
    SessionType,
    TrackerConfig,
)
from log_tracker.session_store import (
    SESSION_COOKIE_NAME,
    CallbackSessionStore,
    InMemorySessionStore,
    SessionStore,
)

__version__ = "1.0.0"

__all__ = [
    "TrackingClient",
    "create_tracking_client",
    "TrackerConfig",
    "SessionType",
    "EventType",
    "BackendEvent",
    "NEUTRAL_EVENT_TYPES",
    "ERROR_EVENT_TYPES",
    "SUCCESS_EVENT_TYPES",
    "FRONTEND_EVENT_TYPES",
    "SessionStore",
    "InMemorySessionStore",
    "CallbackSessionStore",
    "SESSION_COOKIE_NAME",
    "LogTrackerError",
    "ConfigurationError",
    "ServiceError",
    "TrackingError",
    "MalformedResponseError",
    "LifecycleError",
]
