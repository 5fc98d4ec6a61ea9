"""Error kinds raised inside the weather pipeline."""

from typing import Optional


class WeatherError(Exception):
    """Base class for failures that end in sentinel weather data.

    Attributes:
        reason: Short machine-readable code reported in ``fallbackReasons``
        context: Description of the request that failed, if any
    """

    reason = "weather_error"

    def __init__(self, message: str, context: Optional[str] = None):
        super().__init__(message)
        self.context = context

    def __str__(self) -> str:
        message = super().__str__()
        if self.context:
            return f"{message} ({self.context})"
        return message


class MissingCredential(WeatherError):
    """Raised when no upstream API key is configured."""
    reason = "missing_credential"


class NetworkFailure(WeatherError):
    """Raised when the upstream request could not be completed."""
    reason = "network_failure"


class UpstreamHttpError(WeatherError):
    """Raised when the upstream answers with a non-success status."""
    reason = "upstream_http_error"

    def __init__(self, status: int, message: str, context: Optional[str] = None):
        super().__init__(message, context)
        self.status = status


class MalformedResponse(WeatherError):
    """Raised when the upstream body is not JSON of the expected shape."""
    reason = "malformed_response"


class NoUsableIntervals(WeatherError):
    """Raised when a response holds no interval the pipeline can use."""
    reason = "no_usable_intervals"
