import time
import threading
from collections import OrderedDict
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, Optional

from pokeproxy.core.logging import get_logger
from pokeproxy.adapters.interfaces.cache import CacheStrategy

logger = get_logger(__name__)


def freeze(value: Any) -> Any:
    """
    Return a read-only copy of a JSON-like value.

    Mappings become ``MappingProxyType`` views over fresh dicts and lists
    become tuples, recursively. Scalars are returned as they are.
    """
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


class CacheItem:
    """Class representing a cached item with its insertion time."""

    __slots__ = ("value", "inserted_at")

    def __init__(self, value: Any, inserted_at: float):
        """
        Initialize a cache item.

        Args:
            value: Cached value
            inserted_at: Clock reading when the value was stored
        """
        self.value = value
        self.inserted_at = inserted_at

    def is_expired(self, now: float, ttl: Optional[float]) -> bool:
        """
        Check if the item has outlived the TTL.

        Returns:
            True if expired
        """
        if ttl is None:
            return False
        return now - self.inserted_at > ttl


@dataclass
class CacheStats:
    """Cache statistics."""

    hits: int = 0
    misses: int = 0
    evictions: int = 0
    expirations: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0


class MemoryCache(CacheStrategy[str, Any]):
    """
    In-memory LRU cache with per-entry TTL.

    Entries expire ``ttl`` seconds after they were last set; expired entries
    are dropped lazily when touched, there is no sweeper thread. When a new
    key would push the cache over ``max_entries``, expired entries are purged
    and then the least recently read entry is evicted.

    Values are frozen once on ``set``: mappings are stored as read-only
    proxies and lists as tuples. ``get`` hands back the stored value itself,
    so reads cost no copying and callers still cannot mutate an entry.
    A single re-entrant lock serializes every operation.
    """

    def __init__(
        self,
        max_entries: int = 500,
        ttl: Optional[float] = 300,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the in-memory cache.

        Args:
            max_entries: Maximum number of entries held at once
            ttl: Time-to-live in seconds; None or a non-positive value disables expiry
            clock: Monotonic time source, injectable for tests
        """
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")

        self._max_entries = max_entries
        self._ttl = ttl if ttl is not None and ttl > 0 else None
        self._clock = clock

        # Ordered oldest-read first
        self._cache: "OrderedDict[str, CacheItem]" = OrderedDict()

        # Lock for thread safety
        self._lock = threading.RLock()
        self._stats = CacheStats()

        logger.info(
            "In-memory cache initialized",
            extra={"max_entries": max_entries, "ttl_seconds": self._ttl}
        )

    @property
    def ttl(self) -> Optional[float]:
        return self._ttl

    @property
    def stats(self) -> CacheStats:
        return self._stats

    def _live_item(self, key: str) -> Optional[CacheItem]:
        """Return the item for key, dropping it first if it has expired. Caller holds the lock."""
        item = self._cache.get(key)
        if item is None:
            return None

        if item.is_expired(self._clock(), self._ttl):
            del self._cache[key]
            self._stats.expirations += 1
            logger.debug(f"Cache entry expired: {key}")
            return None

        return item

    def _purge_expired(self) -> int:
        """Drop every expired entry. Caller holds the lock."""
        if self._ttl is None:
            return 0

        now = self._clock()
        expired = [k for k, item in self._cache.items() if item.is_expired(now, self._ttl)]
        for key in expired:
            del self._cache[key]

        self._stats.expirations += len(expired)
        return len(expired)

    def has(self, key: str) -> bool:
        """
        Check if key exists in cache.

        Does not count as a read for LRU purposes.

        Args:
            key: Cache key

        Returns:
            True if key exists and has not expired
        """
        with self._lock:
            return self._live_item(key) is not None

    def get(self, key: str) -> Any:
        """
        Get item from cache and mark it most recently used.

        Args:
            key: Cache key

        Returns:
            Cached value or None if not found or expired
        """
        with self._lock:
            item = self._live_item(key)

            if item is None:
                self._stats.misses += 1
                logger.debug(f"Cache miss for key: {key}")
                return None

            self._cache.move_to_end(key)
            self._stats.hits += 1
            logger.debug(f"Cache hit for key: {key}")

            return item.value

    def set(self, key: str, value: Any) -> None:
        """
        Set item in cache, resetting its expiry clock.

        Args:
            key: Cache key
            value: Value to cache
        """
        stored = freeze(value)

        with self._lock:
            if key in self._cache:
                del self._cache[key]
            elif len(self._cache) >= self._max_entries:
                self._purge_expired()
                while len(self._cache) >= self._max_entries:
                    evicted_key, _ = self._cache.popitem(last=False)
                    self._stats.evictions += 1
                    logger.debug(f"Evicted least recently used key: {evicted_key}")

            self._cache[key] = CacheItem(value=stored, inserted_at=self._clock())

        logger.debug(f"Set cache key {key}")

    def delete(self, key: str) -> bool:
        """
        Remove item from cache.

        Args:
            key: Cache key

        Returns:
            True if key was found and deleted
        """
        with self._lock:
            if key in self._cache:
                del self._cache[key]
                logger.debug(f"Deleted cache key: {key}")
                return True

            return False

    def clear(self) -> int:
        """
        Clear all cache entries.

        Returns:
            Number of keys cleared
        """
        with self._lock:
            count = len(self._cache)
            self._cache.clear()

        logger.info(f"Flushed all {count} keys from cache")
        return count

    def size(self) -> int:
        with self._lock:
            self._purge_expired()
            return len(self._cache)

    def capacity(self) -> int:
        return self._max_entries

    def get_stats(self) -> Dict[str, Any]:
        """
        Snapshot of size, capacity and hit/miss counters.

        ``max`` mirrors ``capacity`` for clients of the older stats shape.
        """
        with self._lock:
            size = self.size()
            return {
                "size": size,
                "capacity": self._max_entries,
                "max": self._max_entries,
                "ttl_seconds": self._ttl,
                "hits": self._stats.hits,
                "misses": self._stats.misses,
                "evictions": self._stats.evictions,
                "expirations": self._stats.expirations,
                "hit_rate": round(self._stats.hit_rate, 4),
            }

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: str) -> bool:
        return self.has(key)
