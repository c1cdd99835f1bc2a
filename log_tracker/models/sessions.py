"""
Pydantic models for session-related schemas.
"""

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from log_tracker.models.events import JsonObject

DEFAULT_SESSION_TIMEOUT_MINUTES = 30

# 100 years; keeps endAt inside the datetime range
MAX_SESSION_TIMEOUT_MINUTES = 100 * 366 * 24 * 60


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC with millisecond precision, e.g. 2024-01-01T00:00:00.000Z."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class SessionType(str, Enum):
    """Kind of interaction window being opened."""
    PRE_AUTHENTICATION = "pre-authentication"
    AUTHENTICATED = "authenticated"
    REFRESH_AUTHENTICATION = "refresh-authentication"


class TrackSessionOptions(BaseModel):
    """Optional arguments of start_session."""
    link_id: Optional[str] = None
    metadata: Optional[JsonObject] = None
    timeout: float = Field(
        default=DEFAULT_SESSION_TIMEOUT_MINUTES,
        gt=0,
        le=MAX_SESSION_TIMEOUT_MINUTES,
        allow_inf_nan=False,
        description="Minutes until the collector expires the session",
    )

    def expires_after(self) -> timedelta:
        """Timeout as whole milliseconds (at least one), the precision of the wire timestamps."""
        return timedelta(milliseconds=max(1, round(self.timeout * 60_000)))


class SessionStartRequest(BaseModel):
    """Body of the session creation request."""
    model_config = ConfigDict(populate_by_name=True)

    type: SessionType
    user: str = Field(..., min_length=1, description="Opaque user identifier")
    link_id: Optional[str] = Field(None, alias="linkId")
    metadata: Optional[JsonObject] = None
    timestamp: str
    end_at: str = Field(..., alias="endAt")


class SessionStartResponse(BaseModel):
    """Collector response after opening a session."""
    session_id: str = Field(..., min_length=1)


class SessionEndRequest(BaseModel):
    """Body of the session termination request."""
    timestamp: str
