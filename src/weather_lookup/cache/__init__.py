"""Cache store implementations."""

from .base import CacheStore
from .memory import InMemoryCacheStore
from .redis_store import RedisCacheStore

__all__ = ["CacheStore", "InMemoryCacheStore", "RedisCacheStore"]
