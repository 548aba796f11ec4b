"""Caching module for docucache.

This module provides the read-through query cache: cache stores, key
composition, hydration of cached payloads and scope invalidation.
"""

from docucache.cache.base import CacheStore
from docucache.cache.hydrator import Hydrator
from docucache.cache.interceptor import CachedQueryExecutor
from docucache.cache.invalidator import Invalidator
from docucache.cache.keys import CacheKeyBuilder
from docucache.cache.memory import InMemoryCacheStore
from docucache.cache.redis_store import RedisCacheStore

__all__ = [
    "CacheStore",
    "InMemoryCacheStore",
    "RedisCacheStore",
    "CacheKeyBuilder",
    "Hydrator",
    "CachedQueryExecutor",
    "Invalidator",
]
