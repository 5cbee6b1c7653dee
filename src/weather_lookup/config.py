"""Typed settings loader for the weather lookup service."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import AnyUrl, Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigError
from .redaction import sanitize_text

DEFAULT_WEATHER_API_BASE_URL = (
    "https://weather.visualcrossing.com/VisualCrossingWebServices/rest/services/timeline"
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_env: Literal["dev", "staging", "prod"] = Field(default="dev", alias="APP_ENV")

    weather_api_key: str = Field(alias="WEATHER_API_KEY", repr=False)
    weather_api_base_url: AnyUrl = Field(
        default=DEFAULT_WEATHER_API_BASE_URL,
        alias="WEATHER_API_BASE_URL",
    )
    weather_timeout_seconds: float = Field(default=10.0, alias="WEATHER_TIMEOUT_SECONDS")
    weather_user_agent: str = Field(
        default="weather-lookup/0.1",
        alias="WEATHER_USER_AGENT",
    )

    cache_backend: Literal["redis", "memory"] = Field(default="redis", alias="CACHE_BACKEND")
    redis_url: str = Field(default="redis://localhost:6379/0", alias="REDIS_URL", repr=False)
    redis_socket_timeout_seconds: float = Field(
        default=2.0,
        alias="REDIS_SOCKET_TIMEOUT_SECONDS",
    )
    cache_ttl_seconds: int = Field(default=600, alias="CACHE_TTL_SECONDS")

    lookup_single_flight: bool = Field(default=False, alias="LOOKUP_SINGLE_FLIGHT")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        alias="LOG_LEVEL",
    )

    @model_validator(mode="after")
    def validate_values(self) -> Settings:
        """Reject blank credentials and non-positive timings."""
        self.weather_api_key = self.weather_api_key.strip()
        if not self.weather_api_key:
            raise ValueError("WEATHER_API_KEY must not be empty.")
        if not self.weather_user_agent.strip():
            raise ValueError("WEATHER_USER_AGENT must not be empty.")
        if self.weather_timeout_seconds <= 0:
            raise ValueError("WEATHER_TIMEOUT_SECONDS must be > 0.")
        if self.cache_ttl_seconds <= 0:
            raise ValueError("CACHE_TTL_SECONDS must be > 0.")
        if self.redis_socket_timeout_seconds <= 0:
            raise ValueError("REDIS_SOCKET_TIMEOUT_SECONDS must be > 0.")
        if self.cache_backend == "redis" and not self.redis_url.startswith(
            ("redis://", "rediss://", "unix://")
        ):
            raise ValueError("REDIS_URL must use the redis://, rediss:// or unix:// scheme.")
        return self

    def safe_summary(self) -> dict[str, Any]:
        """Return config summary safe for logging (no credentials)."""
        return {
            "app_env": self.app_env,
            "weather_api_base_url": str(self.weather_api_base_url),
            "weather_timeout_seconds": self.weather_timeout_seconds,
            "cache_backend": self.cache_backend,
            "redis_url": sanitize_text(self.redis_url),
            "cache_ttl_seconds": self.cache_ttl_seconds,
            "lookup_single_flight": self.lookup_single_flight,
            "log_level": self.log_level,
        }


def load_settings() -> Settings:
    """Load and validate settings, raising ConfigError on failure."""
    try:
        return Settings()
    except ValidationError as exc:
        # Inputs are left out so a rejected API key never reaches the logs.
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'settings'}: {error['msg']}"
            for error in exc.errors(include_url=False, include_input=False)
        )
        raise ConfigError(f"Invalid configuration: {details}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed reading environment/.env: {exc}") from exc
