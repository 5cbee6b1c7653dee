"""Provider-agnostic upstream weather interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class WeatherSource(ABC):
    """Base contract for upstream providers consulted on a cache miss."""

    @abstractmethod
    def fetch(self, city: str) -> Any:
        """Return the decoded, not yet validated, provider payload for ``city``."""

    @abstractmethod
    def close(self) -> None:
        """Release provider resources."""
