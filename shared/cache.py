"""
Caching utilities for generated subtitle documents.
"""

import json
import threading
import time
from collections.abc import Callable
from typing import Any

from shared.logging_utils import setup_logging
from shared.models import ClockConfig

logger = setup_logging("flash-clock-cache")

DEFAULT_TTL_SECONDS = 30
DEFAULT_MAX_ENTRIES = 100


def cache_key(config: ClockConfig) -> str:
    """Canonical key for a resolved configuration, independent of how it was encoded."""
    return json.dumps(config.to_wire(), sort_keys=True, separators=(",", ":"))


class ResponseCache:
    """In-memory document cache with TTL (Time To Live) and a size-triggered sweep.

    Entries expire ``ttl`` seconds after insertion. When the number of entries
    exceeds ``max_entries`` every expired entry is dropped; live entries are
    never evicted, so the bound is soft.
    """

    def __init__(
        self,
        ttl: float = DEFAULT_TTL_SECONDS,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize empty cache.

        Args:
            ttl: Time to live in seconds, measured from insertion
            max_entries: Size above which expired entries are swept
            clock: Monotonic time source in seconds
        """
        self.ttl = ttl
        self.max_entries = max_entries
        self._clock = clock
        self._lock = threading.Lock()
        self._cache: dict[str, dict[str, Any]] = {}

    def get(self, config: ClockConfig) -> str | None:
        """
        Get a cached document for a configuration.

        Args:
            config: Resolved configuration

        Returns:
            Cached document if present and not expired, None otherwise
        """
        key = cache_key(config)
        with self._lock:
            item = self._cache.get(key)
            if item is None:
                logger.debug(f"Cache miss: {key}")
                return None
            if self._clock() - item["inserted"] < self.ttl:
                logger.debug(f"Cache hit: {key}")
                return item["value"]
            # Remove expired item
            del self._cache[key]
        logger.debug(f"Cache entry expired: {key}")
        return None

    def put(self, config: ClockConfig, document: str) -> None:
        """
        Store a document for a configuration.

        Args:
            config: Resolved configuration
            document: Assembled WebVTT text
        """
        key = cache_key(config)
        with self._lock:
            self._cache[key] = {"value": document, "inserted": self._clock()}
            if len(self._cache) > self.max_entries:
                removed = self._sweep_expired()
                logger.debug(f"Cache over {self.max_entries} entries, swept {removed} expired")

    def size(self) -> int:
        """Number of stored entries, expired or not."""
        with self._lock:
            return len(self._cache)

    def _sweep_expired(self) -> int:
        now = self._clock()
        expired_keys = [
            key for key, item in self._cache.items() if now - item["inserted"] >= self.ttl
        ]
        for key in expired_keys:
            del self._cache[key]
        return len(expired_keys)


class NullCache:
    """Cache stand-in that never stores anything. Used when caching is disabled."""

    def get(self, config: ClockConfig) -> str | None:
        return None

    def put(self, config: ClockConfig, document: str) -> None:
        return None
