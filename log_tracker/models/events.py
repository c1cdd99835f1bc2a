"""
Pydantic models for event-related schemas.
"""

from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, JsonValue, PrivateAttr

from log_tracker.errors import LifecycleError

# Metadata is an open JSON object: string keys, any JSON value
JsonObject = dict[str, JsonValue]

# Sent as the duration of events that have no measured interval
POINT_IN_TIME_DURATION = 1


class EventType(str, Enum):
    """Every event kind the collector understands."""
    # Neutral
    API_CALL = "api_call"
    AUTH_ATTEMPT = "auth_attempt"
    PAGE_VIEW = "page_view"
    CLICK = "click"
    FORM_SUBMIT = "form_submit"
    # Errors
    ERROR = "error"
    API_ERROR = "api_error"
    AUTH_FAILURE = "auth_failure"
    VALIDATION_ERROR = "validation_error"
    # Successes
    API_SUCCESS = "api_success"
    AUTH_SUCCESS = "auth_success"


NEUTRAL_EVENT_TYPES = frozenset({
    EventType.API_CALL,
    EventType.AUTH_ATTEMPT,
    EventType.PAGE_VIEW,
    EventType.CLICK,
    EventType.FORM_SUBMIT,
})

ERROR_EVENT_TYPES = frozenset({
    EventType.ERROR,
    EventType.API_ERROR,
    EventType.AUTH_FAILURE,
    EventType.VALIDATION_ERROR,
})

SUCCESS_EVENT_TYPES = frozenset({
    EventType.API_SUCCESS,
    EventType.AUTH_SUCCESS,
})

# Kinds a browser host times on its own side
FRONTEND_EVENT_TYPES = frozenset({
    EventType.PAGE_VIEW,
    EventType.CLICK,
    EventType.FORM_SUBMIT,
    EventType.ERROR,
})


def event_category(event_type: EventType) -> str:
    """Return "neutral", "error" or "success" for an event kind."""
    if event_type in ERROR_EVENT_TYPES:
        return "error"
    if event_type in SUCCESS_EVENT_TYPES:
        return "success"
    return "neutral"


class BackendEvent(BaseModel):
    """
    Open handle for a backend event.

    Created locally by TrackingClient.start_backend_event and closed by
    TrackingClient.end_backend_event. A handle can be closed once.
    """
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId", min_length=1)
    source: Literal["Backend"] = "Backend"
    type: EventType
    link_id: Optional[str] = Field(None, alias="linkId")
    metadata: Optional[JsonObject] = None
    start_time: float = Field(..., alias="startTime", description="Monotonic clock reading in milliseconds")
    event_id: Optional[str] = Field(None, alias="eventId", description="Set by the collector once closed")

    # pending -> closing -> closed; a failed close goes back to pending
    _state: str = PrivateAttr(default="pending")

    @property
    def closed(self) -> bool:
        return self._state == "closed"

    @property
    def pending(self) -> bool:
        return self._state == "pending"

    def begin_close(self):
        """Move a pending handle to closing; anything else is a double close."""
        if self._state != "pending":
            raise LifecycleError(f"Backend event {self.type.value} for session {self.session_id} is already closed")
        self._state = "closing"

    def reopen(self):
        """Return a handle whose close failed to pending."""
        if self._state == "closing":
            self._state = "pending"

    def mark_closed(self, event_id: str):
        self.event_id = event_id
        self._state = "closed"


class BackendEventRequest(BaseModel):
    """Finished backend event as sent to the collector."""
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId", min_length=1)
    source: Literal["Backend"] = "Backend"
    type: EventType
    link_id: Optional[str] = Field(None, alias="linkId")
    metadata: Optional[JsonObject] = None
    duration: Union[int, float] = Field(..., ge=0, description="Elapsed time in milliseconds")
    timestamp: str


class EventResponse(BaseModel):
    """Collector response after accepting an event."""
    event_id: str = Field(..., min_length=1)
