"""In-process TTL cache store for local runs and tests."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable

from .base import CacheStore


class InMemoryCacheStore(CacheStore):
    """A lightweight TTL cache emulating Redis ``GET``/``SET EX`` behaviour."""

    def __init__(self, time_func: Callable[[], float] = time.monotonic) -> None:
        self._time_func = time_func
        self._lock = threading.Lock()
        self._storage: dict[str, tuple[float, str]] = {}

    def get(self, key: str) -> str | None:
        with self._lock:
            item = self._storage.get(key)
            if item is None:
                return None
            expires_at, value = item
            if expires_at <= self._time_func():
                del self._storage[key]
                return None
            return value

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        with self._lock:
            self._storage[key] = (self._time_func() + ttl_seconds, value)

    def clear(self) -> None:
        with self._lock:
            self._storage.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._storage)
