"""Process-wide clients built once at startup and shared across lookups."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from .cache.base import CacheStore
from .cache.memory import InMemoryCacheStore
from .cache.redis_store import RedisCacheStore
from .config import Settings
from .lookup import WeatherLookup
from .redaction import sanitize_for_logging
from .weather.base import WeatherSource
from .weather.visualcrossing import VisualCrossingClient


@dataclass
class LookupContext:
    """Owns the cache connection and upstream client for the process lifetime."""

    settings: Settings
    cache: CacheStore
    source: WeatherSource
    lookup: WeatherLookup

    def __enter__(self) -> LookupContext:
        return self

    def __exit__(self, exc_type: Any, exc: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        try:
            self.source.close()
        finally:
            self.cache.close()


def build_cache(settings: Settings, logger: logging.Logger) -> CacheStore:
    if settings.cache_backend == "memory":
        return InMemoryCacheStore()
    return RedisCacheStore.from_url(
        settings.redis_url,
        logger=logger,
        socket_timeout_seconds=settings.redis_socket_timeout_seconds,
    )


def build_context(
    settings: Settings,
    logger: logging.Logger,
    *,
    cache: CacheStore | None = None,
    source: WeatherSource | None = None,
) -> LookupContext:
    """Wire the configured cache and provider into a ready-to-use lookup."""
    cache = cache if cache is not None else build_cache(settings, logger)
    source = source if source is not None else VisualCrossingClient(settings, logger)
    lookup = WeatherLookup(
        cache=cache,
        source=source,
        logger=logger,
        ttl_seconds=settings.cache_ttl_seconds,
        single_flight=settings.lookup_single_flight,
    )
    logger.info(
        "Lookup context ready: %s",
        json.dumps(sanitize_for_logging(settings.safe_summary()), sort_keys=True),
    )
    return LookupContext(settings=settings, cache=cache, source=source, lookup=lookup)
