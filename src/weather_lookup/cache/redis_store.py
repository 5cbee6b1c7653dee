"""Redis-backed cache store."""

from __future__ import annotations

import logging

import redis

from ..exceptions import CacheError
from ..redaction import sanitize_text
from .base import CacheStore


class RedisCacheStore(CacheStore):
    """Adapter over a Redis client speaking ``GET key`` / ``SET key value EX seconds``."""

    def __init__(self, client: redis.Redis, logger: logging.Logger) -> None:
        self._client = client
        self.logger = logger

    @classmethod
    def from_url(
        cls,
        url: str,
        logger: logging.Logger,
        socket_timeout_seconds: float = 2.0,
    ) -> RedisCacheStore:
        """Build a store over a pooled client; no connection is opened until first use."""
        # Raw bytes are decoded here so undecodable values read as corrupt entries.
        client = redis.Redis.from_url(
            url,
            decode_responses=False,
            socket_timeout=socket_timeout_seconds,
            socket_connect_timeout=socket_timeout_seconds,
        )
        return cls(client, logger)

    def get(self, key: str) -> str | None:
        try:
            value = self._client.get(key)
        except (redis.RedisError, UnicodeDecodeError) as exc:
            raise CacheError(f"Cache read failed for {key!r}: {sanitize_text(str(exc))}") from exc
        if isinstance(value, bytes):
            return value.decode("utf-8", errors="replace")
        return value

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        try:
            self._client.set(key, value, ex=ttl_seconds)
        except redis.RedisError as exc:
            raise CacheError(
                f"Cache write failed for {key!r}: {sanitize_text(str(exc))}"
            ) from exc

    def close(self) -> None:
        self._client.close()
