"""
Pydantic model for client configuration.
"""

from pydantic import BaseModel, ConfigDict, Field

REQUIRED_FIELDS = ("url", "application_id", "public_key")


class TrackerConfig(BaseModel):
    """Immutable connection settings for one collector application."""
    model_config = ConfigDict(frozen=True)

    url: str = Field(..., description="Collector base URL, e.g. https://collector.example.com")
    application_id: str = Field(..., description="Sent as x-application-id")
    public_key: str = Field(..., repr=False, description="Sent as x-public-key")
    api_prefix: str = Field(default="/api", description="Path prefix before /track; empty for older collectors")

    @classmethod
    def from_settings(cls, settings=None) -> "TrackerConfig":
        """Build a config from environment settings (see shared_config)."""
        if settings is None:
            from shared_config import settings
        return cls(
            url=settings.LOG_TRACKER_URL,
            application_id=settings.LOG_TRACKER_APPLICATION_ID,
            public_key=settings.LOG_TRACKER_PUBLIC_KEY,
            api_prefix=settings.LOG_TRACKER_API_PREFIX,
        )

    def missing_fields(self) -> list[str]:
        """Names of required fields that are empty or blank."""
        return [name for name in REQUIRED_FIELDS if not getattr(self, name).strip()]

    @property
    def base_url(self) -> str:
        """URL and prefix joined, without a trailing slash."""
        prefix = self.api_prefix.strip().strip("/")
        url = self.url.strip().rstrip("/")
        return f"{url}/{prefix}" if prefix else url
