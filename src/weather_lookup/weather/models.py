"""Tolerant intermediate models for upstream timeline payloads."""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class UpstreamDay(BaseModel):
    """One entry of the provider's ``days`` list.

    Descriptive fields are best-effort: values of the wrong type decode to
    ``None`` instead of failing validation.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    temp: float | None = None
    conditions: str | None = None

    @field_validator("temp", mode="before")
    @classmethod
    def numeric_or_none(cls, value: Any) -> Any:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        try:
            finite = math.isfinite(value)
        except OverflowError:
            return None
        if not finite:
            return None
        return value

    @field_validator("conditions", mode="before")
    @classmethod
    def string_or_none(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value
        return None
