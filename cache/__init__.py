"""Cache module - Fetched table and boundary caching."""

from .cache_manager import CacheManager, cache_manager

__all__ = ['CacheManager', 'cache_manager']
