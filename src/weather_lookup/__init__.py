"""Cache-aside weather lookup service."""

from .exceptions import (
    CacheError,
    NormalizationError,
    UpstreamError,
    ValidationError,
    WeatherLookupError,
)
from .lookup import WeatherLookup
from .models import WeatherRecord

__all__ = [
    "CacheError",
    "NormalizationError",
    "UpstreamError",
    "ValidationError",
    "WeatherLookup",
    "WeatherLookupError",
    "WeatherRecord",
]

__version__ = "0.1.0"
