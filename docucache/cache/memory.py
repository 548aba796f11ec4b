"""In-memory cache store for docucache."""

import asyncio

from docucache.cache.base import CacheStore, Payload


class InMemoryCacheStore(CacheStore):
    """Partitioned in-memory cache store.

    Entries live in a dict of dicts: ``{partition: {key: payload}}``.
    It's suitable for single-process deployments or testing. Entries never
    expire; they are only removed by ``delete_partition`` or ``clear``.
    """

    def __init__(self):
        """Initialize the in-memory store."""
        self._partitions: dict[str, dict[str, Payload]] = {}
        self._lock = asyncio.Lock()
        self._hits = 0
        self._misses = 0

    async def get(self, partition: str, key: str) -> Payload | None:
        """Get a payload from the cache.

        Args:
            partition: The partition name
            key: The composite key

        Returns:
            The cached payload or None if not found
        """
        async with self._lock:
            value = self._partitions.get(partition, {}).get(key)
            if value is None:
                self._misses += 1
            else:
                self._hits += 1
            return value

    async def set(self, partition: str, key: str, payload: Payload) -> None:
        """Store a payload, replacing any previous value.

        Args:
            partition: The partition name
            key: The composite key
            payload: Serialized JSON payload
        """
        async with self._lock:
            self._partitions.setdefault(partition, {})[key] = payload

    async def delete_partition(self, partition: str) -> bool:
        """Delete every entry in a partition.

        Args:
            partition: The partition name

        Returns:
            True if the partition existed
        """
        async with self._lock:
            return self._partitions.pop(partition, None) is not None

    async def keys(self, partition: str) -> list[str]:
        async with self._lock:
            return list(self._partitions.get(partition, {}))

    async def clear(self) -> None:
        """Clear all partitions."""
        async with self._lock:
            self._partitions.clear()
            self._hits = 0
            self._misses = 0

    @property
    def size(self) -> int:
        """Get the total number of entries across partitions."""
        return sum(len(entries) for entries in self._partitions.values())

    def stats(self) -> dict:
        """Get cache statistics.

        Returns:
            Dictionary with cache statistics
        """
        total = self._hits + self._misses
        return {
            "partitions": len(self._partitions),
            "size": self.size,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": self._hits / total if total > 0 else 0.0,
        }
