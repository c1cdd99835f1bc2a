"""
Error types raised by the tracking client.

Transport failures (httpx.TransportError and subclasses) are not wrapped and
reach the caller as raised by httpx.
"""

GENERIC_ERROR_MESSAGE = "An error occurred"


class LogTrackerError(Exception):
    """Base class for every error raised by the client."""
    kind = "error"


class ConfigurationError(LogTrackerError):
    """Missing or empty client configuration."""
    kind = "configuration"


class ServiceError(LogTrackerError):
    """The collector answered with a non-2xx status."""
    kind = "service"

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status_code < 500

    @property
    def is_server_error(self) -> bool:
        return self.status_code >= 500

    def __repr__(self) -> str:
        return f"ServiceError(status_code={self.status_code}, message={self.message!r})"


# Older name for ServiceError
TrackingError = ServiceError


class MalformedResponseError(LogTrackerError):
    """A 2xx response whose body is not JSON or lacks the expected identifier."""
    kind = "malformed_response"

    def __init__(self, message: str, status_code: int, field: str = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.field = field


class LifecycleError(LogTrackerError):
    """Invalid session or event transition (double close, close before open)."""
    kind = "lifecycle"
