"""Scope invalidation for docucache."""

import logging
from typing import Any

from docucache.cache.base import CacheStore
from docucache.cache.keys import CacheKeyBuilder, get_key_builder

logger = logging.getLogger(__name__)


class Invalidator:
    """Drops every cached result stored under a scope.

    Write paths call this after creating, updating or deleting data that
    cached reads in the scope may have seen. Partition names come from the
    same ``CacheKeyBuilder`` the read path uses.
    """

    def __init__(self, cache: CacheStore, key_builder: CacheKeyBuilder | None = None):
        self._cache = cache
        self.key_builder = key_builder or get_key_builder()

    async def invalidate(self, scope_key: Any = "") -> None:
        """Delete all entries under a scope.

        Invalidating an empty scope is a no-op. Backend failures propagate
        as ``CacheUnavailableError`` because callers rely on the scope being
        cleared before they continue.

        Args:
            scope_key: The scope used when the queries were marked cacheable
        """
        partition = self.key_builder.partition(scope_key)
        existed = await self._cache.delete_partition(partition)
        if existed:
            logger.info(f"Invalidated cache partition {partition}")
        else:
            logger.debug(f"Cache partition {partition} was already empty")
