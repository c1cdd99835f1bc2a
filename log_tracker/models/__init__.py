"""
Request, response and handle models.
"""

from log_tracker.models.config import TrackerConfig
from log_tracker.models.events import (
    ERROR_EVENT_TYPES,
    FRONTEND_EVENT_TYPES,
    NEUTRAL_EVENT_TYPES,
    POINT_IN_TIME_DURATION,
    SUCCESS_EVENT_TYPES,
    BackendEvent,
    BackendEventRequest,
    EventResponse,
    EventType,
    JsonObject,
    event_category,
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

__all__ = [
    "TrackerConfig",
    "ERROR_EVENT_TYPES",
    "FRONTEND_EVENT_TYPES",
    "NEUTRAL_EVENT_TYPES",
    "POINT_IN_TIME_DURATION",
    "SUCCESS_EVENT_TYPES",
    "BackendEvent",
    "BackendEventRequest",
    "EventResponse",
    "EventType",
    "JsonObject",
    "event_category",
    "DEFAULT_SESSION_TIMEOUT_MINUTES",
    "SessionEndRequest",
    "SessionStartRequest",
    "SessionStartResponse",
    "SessionType",
    "TrackSessionOptions",
    "format_timestamp",
]
