"""Cache-aside weather lookup."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager

from pydantic import ValidationError as RecordDecodeError

from .cache.base import CacheStore
from .exceptions import CacheError, ValidationError
from .models import WeatherRecord
from .weather.base import WeatherSource
from .weather.normalizer import normalize

DEFAULT_TTL_SECONDS = 10 * 60


class _KeyLock:
    """A per-city miss lock and the number of lookups using it."""

    __slots__ = ("lock", "users")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.users = 0


class WeatherLookup:
    """Serves weather records from the cache, falling back to the upstream provider.

    A miss costs at most one upstream call and one cache write. Cache faults
    never fail a lookup that upstream can still satisfy; upstream and
    normalization failures propagate and leave the cache untouched.

    With ``single_flight`` enabled, concurrent misses for the same city wait
    on a per-city lock and re-read the cache instead of each calling upstream.
    """

    def __init__(
        self,
        *,
        cache: CacheStore,
        source: WeatherSource,
        logger: logging.Logger | None = None,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        single_flight: bool = False,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be > 0")
        self.cache = cache
        self.source = source
        self.ttl_seconds = ttl_seconds
        self.single_flight = single_flight
        self._log = logger or logging.getLogger(self.__class__.__name__)
        self._key_locks: dict[str, _KeyLock] = {}
        self._key_locks_guard = threading.Lock()

    # Public API ---------------------------------------------------------
    def lookup(self, city: str) -> WeatherRecord:
        """Return the weather record for ``city``.

        Raises ValidationError, UpstreamError or NormalizationError.
        """
        if not isinstance(city, str) or not city.strip():
            raise ValidationError("city parameter is required")

        cached = self._read_cache(city)
        if cached is not None:
            return cached

        with self._miss_guard(city):
            if self.single_flight:
                cached = self._read_cache(city)
                if cached is not None:
                    return cached
            self._log.debug(
                "Cache miss for %r; fetching upstream",
                city,
                extra={"city": city, "cache": "miss"},
            )
            payload = self.source.fetch(city)
            record = normalize(city, payload)
            self._write_cache(record)
        return record

    # Helpers ------------------------------------------------------------
    def _read_cache(self, city: str) -> WeatherRecord | None:
        try:
            raw = self.cache.get(city)
        except CacheError as exc:
            self._log.warning(
                "Cache read failed, treating as miss: %s",
                exc,
                extra={"city": city, "cache": "read_error"},
            )
            return None
        if raw is None:
            return None
        try:
            record = WeatherRecord.from_cache_value(raw)
        except RecordDecodeError as exc:
            self._log.warning(
                "Discarding corrupt cache entry for %r (%d errors)",
                city,
                exc.error_count(),
                extra={"city": city, "cache": "corrupt"},
            )
            return None
        self._log.debug("Cache hit for %r", city, extra={"city": city, "cache": "hit"})
        return record

    def _write_cache(self, record: WeatherRecord) -> None:
        try:
            self.cache.set(record.city, record.to_cache_value(), self.ttl_seconds)
        except CacheError as exc:
            self._log.warning(
                "Cache write failed; returning uncached record: %s",
                exc,
                extra={"city": record.city, "cache": "write_error"},
            )

    @contextmanager
    def _miss_guard(self, city: str) -> Iterator[None]:
        if not self.single_flight:
            yield
            return
        with self._key_locks_guard:
            key_lock = self._key_locks.get(city)
            if key_lock is None:
                key_lock = self._key_locks[city] = _KeyLock()
            key_lock.users += 1
        try:
            with key_lock.lock:
                yield
        finally:
            # The last user drops the entry so idle cities hold no lock.
            with self._key_locks_guard:
                key_lock.users -= 1
                if key_lock.users == 0:
                    del self._key_locks[city]
