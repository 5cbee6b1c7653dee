"""Visual Crossing timeline API client."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from ..exceptions import UpstreamError
from ..redaction import sanitize_text
from .base import WeatherSource

MAX_ERROR_BODY_CHARS = 500

# Metric units, JSON body, daily granularity only.
FIXED_QUERY_PARAMS: dict[str, str] = {
    "unitGroup": "metric",
    "include": "days",
    "contentType": "json",
}


class VisualCrossingClient(WeatherSource):
    """Fetches raw timeline payloads; one GET per call and no retries."""

    provider_name = "visualcrossing"

    def __init__(
        self,
        settings: Any,
        logger: logging.Logger,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.settings = settings
        self.logger = logger
        self._api_key = settings.weather_api_key
        self._client = httpx.Client(
            base_url=str(settings.weather_api_base_url),
            timeout=settings.weather_timeout_seconds,
            headers={
                "Accept": "application/json",
                "User-Agent": settings.weather_user_agent,
            },
            transport=transport,
        )

    def __enter__(self) -> VisualCrossingClient:
        return self

    def __exit__(self, exc_type: Any, exc: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close underlying HTTP client."""
        self._client.close()

    def fetch(self, city: str) -> Any:
        """GET the timeline for ``city`` and return the decoded JSON body."""
        path = quote(city, safe="")
        params = {**FIXED_QUERY_PARAMS, "key": self._api_key}
        try:
            response = self._client.get(path, params=params)
        except httpx.HTTPError as exc:
            raise UpstreamError(
                f"Weather request for {city!r} failed: "
                f"{type(exc).__name__}: {sanitize_text(str(exc))}"
            ) from exc

        if not response.is_success:
            body = sanitize_text(response.text[:MAX_ERROR_BODY_CHARS])
            raise UpstreamError(
                f"Weather API error: status code {response.status_code}, response: {body}",
                status_code=response.status_code,
                body=body,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            body = sanitize_text(response.text[:MAX_ERROR_BODY_CHARS])
            raise UpstreamError(
                f"Weather API returned a non-JSON response for {city!r}.",
                status_code=response.status_code,
                body=body,
            ) from exc

        self.logger.info(
            "Fetched weather for %r from %s (HTTP %d)",
            city, self.provider_name, response.status_code,
            extra={
                "city": city,
                "provider": self.provider_name,
                "status_code": response.status_code,
            },
        )
        return payload
