"""Redis cache store for docucache.

Each partition is one Redis hash; composite keys are hash fields. Dropping a
partition is a single ``DEL`` of the hash, which Redis applies atomically.
"""

import redis.asyncio as redis
from redis.exceptions import RedisError

from docucache.cache.base import CacheStore, Payload
from docucache.core.exceptions import CacheUnavailableError


class RedisCacheStore(CacheStore):
    """Cache store backed by Redis hashes.

    The Redis client is created and owned by the caller (usually a
    ``RedisClientManager``); this store only issues commands on it.
    """

    def __init__(self, client: redis.Redis, url: str | None = None):
        """Initialize the Redis store.

        Args:
            client: A connected ``redis.asyncio.Redis`` client
            url: The server URL, used in error messages
        """
        self._redis = client
        self.url = url

    def _unavailable(self, operation: str, error: Exception) -> CacheUnavailableError:
        return CacheUnavailableError(
            operation=operation,
            original_error=error,
            url=self.url,
        )

    async def get(self, partition: str, key: str) -> Payload | None:
        try:
            return await self._redis.hget(partition, key)
        except RedisError as e:
            raise self._unavailable("get", e) from e

    async def set(self, partition: str, key: str, payload: Payload) -> None:
        try:
            await self._redis.hset(partition, key, payload)
        except RedisError as e:
            raise self._unavailable("set", e) from e

    async def delete_partition(self, partition: str) -> bool:
        try:
            deleted = await self._redis.delete(partition)
        except RedisError as e:
            raise self._unavailable("delete_partition", e) from e
        return deleted > 0

    async def keys(self, partition: str) -> list[str]:
        try:
            fields = await self._redis.hkeys(partition)
        except RedisError as e:
            raise self._unavailable("keys", e) from e
        return [f.decode("utf-8") if isinstance(f, bytes) else f for f in fields]
