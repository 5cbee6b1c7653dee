"""Upstream weather provider integration and payload normalization."""

from .base import WeatherSource
from .models import UpstreamDay
from .normalizer import DEFAULT_CONDITION, DEFAULT_TEMPERATURE, normalize
from .visualcrossing import VisualCrossingClient

__all__ = [
    "DEFAULT_CONDITION",
    "DEFAULT_TEMPERATURE",
    "UpstreamDay",
    "VisualCrossingClient",
    "WeatherSource",
    "normalize",
]
