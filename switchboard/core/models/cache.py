"""In-memory TTL cache for the aggregated model catalog.

Staleness is evaluated lazily at read time. Stale entries are never evicted:
a stale catalog is still returned so routing can continue against the last
known-good data until a refresh replaces it.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

CATALOG_CACHE_KEY = "allAvailableModels"


class StalePolicy(str, Enum):
    """What a non-forced catalog load does with a stale entry."""

    SERVE = "serve"  # keep serving the stale entry until a forced refresh
    REFRESH = "refresh"  # fetch again on the next non-forced load


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """A cached value stamped with its creation time and TTL (seconds)."""

    value: Any
    created_at: float
    ttl: float

    @property
    def expires_at(self) -> float:
        return self.created_at + self.ttl

    def is_fresh(self, now: float) -> bool:
        return now < self.expires_at

    def age(self, now: float) -> float:
        return max(0.0, now - self.created_at)


class CacheStore:
    """Key/value store with per-entry TTL and no eviction.

    Responsibilities:
    - Hold entries keyed by string, replacing them wholesale on ``set``
    - Report freshness relative to an injectable clock

    ``get`` and ``set`` are O(1). Entries are swapped under a lock so readers
    never observe a half-written entry.
    """

    def __init__(self, default_ttl: float = 3600.0, clock: Callable[[], float] = time.time) -> None:
        if default_ttl <= 0:
            raise ValueError(f"Cache TTL must be positive, got {default_ttl}")
        self.default_ttl = default_ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> CacheEntry | None:
        """Return the entry for ``key`` whether fresh or stale, or None."""
        with self._lock:
            return self._entries.get(key)

    def set(self, key: str, value: Any, ttl: float | None = None) -> CacheEntry:
        """Store ``value`` under ``key``, replacing any previous entry."""
        entry = CacheEntry(
            value=value,
            created_at=self._clock(),
            ttl=ttl if ttl is not None else self.default_ttl,
        )
        with self._lock:
            self._entries[key] = entry
        logger.debug(f"Cache SET: {key} (ttl={entry.ttl}s)")
        return entry

    def is_fresh(self, key: str) -> bool:
        entry = self.get(key)
        return entry is not None and entry.is_fresh(self._clock())

    def now(self) -> float:
        return self._clock()

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        """Drop every entry.

        This is primarily useful for testing.
        """
        with self._lock:
            self._entries.clear()
