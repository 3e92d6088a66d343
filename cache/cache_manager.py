"""
Raw Data Cache - fetched table text and boundary files.

Tier 1: Tables (data_cache_ttl)
  - location -> raw CSV text
  - a reload within the TTL re-parses without re-downloading

Tier 2: Boundaries (data_cache_ttl)
  - location -> parsed GeoJSON dict

Derived values (metrics, projections) are never cached: they are cheap and
recomputed per request.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Optional
from collections import OrderedDict

from config import config


@dataclass
class CacheEntry:
    """Single cache entry with value and expiration."""
    value: Any
    expires_at: float
    created_at: float = field(default_factory=time.time)


class LRUCache:
    """LRU cache with per-entry TTL."""

    def __init__(self, max_size: int = 64):
        self._cache: OrderedDict[str, CacheEntry] = OrderedDict()
        self._max_size = max_size
        self.hits = 0
        self.misses = 0

    def get(self, key: str) -> Optional[Any]:
        """Get value if present and not expired."""
        entry = self._cache.get(key)
        if entry is None:
            self.misses += 1
            return None

        if time.time() > entry.expires_at:
            del self._cache[key]
            self.misses += 1
            return None

        # Move to end (most recently used)
        self._cache.move_to_end(key)
        self.hits += 1
        return entry.value

    def set(self, key: str, value: Any, ttl: int) -> None:
        """Set value with TTL in seconds."""
        if key in self._cache:
            del self._cache[key]
        # Evict oldest if at capacity
        while len(self._cache) >= self._max_size:
            self._cache.popitem(last=False)

        self._cache[key] = CacheEntry(value=value, expires_at=time.time() + ttl)

    def clear(self) -> None:
        self._cache.clear()

    def stats(self) -> dict:
        now = time.time()
        valid = sum(1 for e in self._cache.values() if e.expires_at > now)
        return {
            'total_entries': len(self._cache),
            'valid_entries': valid,
            'expired_entries': len(self._cache) - valid,
            'max_size': self._max_size,
            'hits': self.hits,
            'misses': self.misses,
        }


class CacheManager:
    """Two-tier cache for fetched source data."""

    def __init__(self, max_size: Optional[int] = None):
        size = max_size or config.max_cache_size
        self._tables = LRUCache(max_size=size)
        self._boundaries = LRUCache(max_size=size)

    # =========================================================================
    # Tier 1: Tables
    # =========================================================================

    def get_table(self, location: str) -> Optional[str]:
        return self._tables.get(f"table:{location}")

    def set_table(self, location: str, text: str) -> None:
        self._tables.set(f"table:{location}", text, config.data_cache_ttl)

    # =========================================================================
    # Tier 2: Boundaries
    # =========================================================================

    def get_boundaries(self, location: str) -> Optional[dict]:
        return self._boundaries.get(f"geo:{location}")

    def set_boundaries(self, location: str, collection: dict) -> None:
        self._boundaries.set(f"geo:{location}", collection, config.data_cache_ttl)

    # =========================================================================
    # Utilities
    # =========================================================================

    def stats(self) -> dict:
        return {
            'tables': self._tables.stats(),
            'boundaries': self._boundaries.stats(),
        }

    def clear_all(self) -> None:
        self._tables.clear()
        self._boundaries.clear()


# Global cache instance
cache_manager = CacheManager()
