"""The canonical weather record shared by the cache and its callers."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class WeatherRecord(BaseModel):
    """Normalized current-day weather for a single city.

    Serialized to the cache as ``{"city": ..., "temp": ..., "weather": ...}``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    city: str = Field(description="Lookup key exactly as supplied by the caller")
    temperature: float = Field(alias="temp", description="Daily temperature in Celsius")
    condition: str = Field(alias="weather", description="Short sky/weather description")

    @field_validator("city")
    @classmethod
    def city_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("city must not be empty")
        return value

    def to_cache_value(self) -> str:
        """Encode the record for storage in the cache."""
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_cache_value(cls, value: str | bytes) -> WeatherRecord:
        """Decode a cached record; raises pydantic ``ValidationError`` when corrupt."""
        return cls.model_validate_json(value)
