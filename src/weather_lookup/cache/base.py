"""Key-value cache contract used by the lookup orchestrator."""

from __future__ import annotations

from abc import ABC, abstractmethod


class CacheStore(ABC):
    """A string-valued store whose entries expire on their own."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value, or ``None`` when absent or expired."""

    @abstractmethod
    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store ``value`` under ``key``, replacing any prior entry and its TTL."""

    def close(self) -> None:
        """Release backend resources."""
