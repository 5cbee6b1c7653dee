"""Application exception classes."""


class ConfigError(Exception):
    """Raised when configuration is invalid or incomplete."""


class WeatherLookupError(Exception):
    """Base class for errors raised while serving a lookup."""


class ValidationError(WeatherLookupError):
    """Raised when the caller supplies an unusable lookup key."""


class UpstreamError(WeatherLookupError):
    """Raised for weather provider failures with status/body metadata."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class NormalizationError(WeatherLookupError):
    """Raised when a provider payload lacks the required structure."""


class CacheError(WeatherLookupError):
    """Raised when the cache backend cannot be reached."""
