"""Wiring helpers that build a read-through executor from settings."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from docucache.cache.base import CacheStore
from docucache.cache.interceptor import CachedQueryExecutor
from docucache.cache.keys import CacheKeyBuilder
from docucache.cache.redis_store import RedisCacheStore
from docucache.core.client import RedisClientManager, S3ClientManager
from docucache.core.settings import DocuCacheSettings
from docucache.store.base import DocumentStore
from docucache.store.s3 import S3DocumentStore


def build_executor(
    store: DocumentStore,
    cache: CacheStore,
    settings: DocuCacheSettings | None = None,
) -> CachedQueryExecutor:
    """Create an executor configured from settings.

    Args:
        store: The document store to wrap
        cache: Cache store for results
        settings: docucache settings

    Returns:
        A CachedQueryExecutor
    """
    settings = settings or DocuCacheSettings()
    return CachedQueryExecutor(
        store,
        cache,
        key_builder=CacheKeyBuilder(prefix=settings.key_prefix, hash_keys=settings.hash_keys),
        background_writes=settings.background_writes,
        fallback_on_cache_error=settings.fallback_on_cache_error,
    )


@asynccontextmanager
async def create_query_cache(
    store: DocumentStore,
    settings: DocuCacheSettings | None = None,
) -> AsyncGenerator[CachedQueryExecutor, None]:
    """Connect to Redis and yield an executor backed by it.

    Pending background writes are flushed and the connection is closed on
    exit.

    Example:
        async with create_query_cache(store, settings) as executor:
            orders = await executor.execute(query(Order).cache("user:42"))
    """
    settings = settings or DocuCacheSettings()
    async with RedisClientManager(settings) as manager:
        cache = RedisCacheStore(manager.client, url=settings.redis_url)
        executor = build_executor(store, cache, settings)
        try:
            yield executor
        finally:
            await executor.close()


@asynccontextmanager
async def create_document_store(
    settings: DocuCacheSettings | None = None,
) -> AsyncGenerator[S3DocumentStore, None]:
    """Open an S3 client and yield a document store on the configured bucket.

    Example:
        async with create_document_store(settings) as store:
            async with create_query_cache(store, settings) as executor:
                ...
    """
    settings = settings or DocuCacheSettings()
    manager = S3ClientManager(settings)
    async with manager.get_async_client() as client:
        yield S3DocumentStore(
            client, settings.aws_bucket_name, base_path=settings.s3_base_path
        )
