"""Defensive extraction of a WeatherRecord from a raw timeline payload."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..exceptions import NormalizationError
from ..models import WeatherRecord
from .models import UpstreamDay

DEFAULT_TEMPERATURE = 0.0
DEFAULT_CONDITION = "Unknown"


def decode_first_day(payload: Any) -> UpstreamDay:
    """Return the first ``days`` entry, or raise if the payload shape is unusable."""
    if not isinstance(payload, Mapping):
        raise NormalizationError(
            f"Upstream payload must be a JSON object, got {type(payload).__name__}."
        )
    days = payload.get("days")
    if not isinstance(days, list):
        raise NormalizationError("Upstream payload missing 'days' list.")
    if not days:
        raise NormalizationError("Upstream payload contained no days.")
    first = days[0]
    if not isinstance(first, Mapping):
        raise NormalizationError(
            f"Upstream 'days[0]' must be an object, got {type(first).__name__}."
        )
    return UpstreamDay.model_validate(dict(first))


def normalize(city: str, payload: Any) -> WeatherRecord:
    """Build a WeatherRecord for ``city`` from a raw provider payload.

    Only the ``days`` structure is load-bearing. A missing or mistyped
    temperature becomes ``0.0`` and a missing or mistyped condition becomes
    ``"Unknown"``.
    """
    day = decode_first_day(payload)
    return WeatherRecord(
        city=city,
        temperature=day.temp if day.temp is not None else DEFAULT_TEMPERATURE,
        condition=day.conditions if day.conditions is not None else DEFAULT_CONDITION,
    )
