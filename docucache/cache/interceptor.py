"""Read-through query execution for docucache.

``CachedQueryExecutor`` wraps a document store and exposes the same
``execute`` method, so it can be swapped in wherever the store is used.
Queries that are not marked cacheable pass straight through.

Example:
    executor = CachedQueryExecutor(store, RedisCacheStore(client))
    orders = await executor.execute(query(Order, {"status": "active"}).cache("user:42"))
    ...
    await executor.invalidate("user:42")
"""

import asyncio
import logging
from typing import Any

from docucache.cache.base import CacheStore, Payload
from docucache.cache.hydrator import Hydrator
from docucache.cache.invalidator import Invalidator
from docucache.cache.keys import CacheKeyBuilder, get_key_builder
from docucache.core.exceptions import (
    CacheKeyError,
    CacheSerializationError,
    CacheUnavailableError,
)
from docucache.core.query import Query
from docucache.store.base import DocumentStore

logger = logging.getLogger(__name__)


class CachedQueryExecutor:
    """Read-through cache in front of a document store.

    Concurrent misses for the same key are not deduplicated: each one runs
    the store query and writes the cache, and the last write wins.
    """

    def __init__(
        self,
        store: DocumentStore,
        cache: CacheStore,
        key_builder: CacheKeyBuilder | None = None,
        hydrator: Hydrator | None = None,
        background_writes: bool = False,
        fallback_on_cache_error: bool = True,
    ):
        """Initialize the executor.

        Args:
            store: The underlying document store
            cache: Cache store for results
            key_builder: Builds composite keys and partition names
            hydrator: Converts between results and payloads
            background_writes: Write misses back in a detached task
            fallback_on_cache_error: Treat cache read failures as misses
        """
        self._store = store
        self._cache = cache
        self.key_builder = key_builder or get_key_builder()
        self.hydrator = hydrator or Hydrator()
        self.background_writes = background_writes
        self.fallback_on_cache_error = fallback_on_cache_error
        self.invalidator = Invalidator(cache, self.key_builder)
        self._pending: set[asyncio.Task] = set()
        self._hits = 0
        self._misses = 0
        self._bypassed = 0
        self._errors = 0

    @property
    def store(self) -> DocumentStore:
        return self._store

    @property
    def cache(self) -> CacheStore:
        return self._cache

    def mark_cacheable(self, query: Query, scope_key: Any = "") -> Query:
        """Opt a query into the read-through path.

        Args:
            query: The query to cache
            scope_key: Partition for the cached result

        Returns:
            A new cacheable query
        """
        return query.cache(scope_key)

    async def execute(self, query: Query) -> Any:
        """Execute a query, serving it from the cache when possible.

        Args:
            query: The query to run

        Returns:
            Documents from the cache on a hit, otherwise the store's result

        Raises:
            HydrationError: If a cached entry is corrupt
            CacheUnavailableError: On read failure when fallback is disabled
        """
        if not query.cacheable:
            self._bypassed += 1
            return await self._store.execute(query)

        try:
            key = self.key_builder.compose(
                query.predicate, query.collection_name, query.key_options()
            )
            partition = self.key_builder.partition(query.scope_key)
        except CacheKeyError as e:
            logger.warning(f"Executing {query.collection_name} query uncached: {e.message}")
            self._bypassed += 1
            return await self._store.execute(query)

        cached = await self._read(partition, key)
        if cached:
            self._hits += 1
            logger.debug(f"Cache hit in {partition} for {key}")
            return self.hydrator.hydrate(cached, query.model)

        self._misses += 1
        logger.debug(f"Cache miss in {partition} for {key}")
        result = await self._store.execute(query)

        if result is None:
            return result

        try:
            payload = self.hydrator.serialize(result)
        except CacheSerializationError as e:
            self._errors += 1
            logger.error(f"Not caching {query.collection_name} result: {e.message}")
            return result

        if self.background_writes:
            task = asyncio.create_task(self._write(partition, key, payload))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)
        else:
            await self._write(partition, key, payload)
        return result

    async def invalidate(self, scope_key: Any = "") -> None:
        """Delete every cached result under a scope.

        Args:
            scope_key: The scope to clear
        """
        await self.invalidator.invalidate(scope_key)

    async def _read(self, partition: str, key: str) -> Payload | None:
        try:
            return await self._cache.get(partition, key)
        except CacheUnavailableError as e:
            self._errors += 1
            if not self.fallback_on_cache_error:
                raise
            logger.warning(f"Cache read failed, falling back to store: {e.message}")
            return None

    async def _write(self, partition: str, key: str, payload: Payload) -> None:
        try:
            await self._cache.set(partition, key, payload)
        except Exception as e:
            # The caller already has a valid result
            self._errors += 1
            logger.error(f"Failed to cache result in {partition}: {e}")

    async def drain(self) -> None:
        """Wait for pending background writes to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    async def close(self) -> None:
        """Finish pending writes and close the cache store."""
        await self.drain()
        await self._cache.close()

    def stats(self) -> dict:
        """Get executor statistics.

        Returns:
            Dictionary with hit, miss, bypass and error counts
        """
        lookups = self._hits + self._misses
        return {
            "hits": self._hits,
            "misses": self._misses,
            "bypassed": self._bypassed,
            "errors": self._errors,
            "hit_rate": self._hits / lookups if lookups > 0 else 0.0,
            "pending_writes": len(self._pending),
        }
