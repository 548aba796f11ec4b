"""Client managers for the cache backend and the document store.

Both managers are constructed explicitly from settings and handed to the
components that need them; there are no module-level client singletons.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import redis.asyncio as redis
from aiobotocore.client import AioBaseClient
from aiobotocore.session import get_session
from botocore.config import Config
from botocore.exceptions import ClientError
from redis.exceptions import RedisError

from docucache.core.exceptions import (
    CacheConfigurationError,
    CacheUnavailableError,
    StoreExecutionError,
)
from docucache.core.settings import DocuCacheSettings


class RedisClientManager:
    """Owns the process-wide Redis connection pool.

    Example:
        async with RedisClientManager(settings) as manager:
            store = RedisCacheStore(manager.client, url=settings.redis_url)
    """

    def __init__(self, settings: DocuCacheSettings | None = None):
        """Initialize the manager.

        Args:
            settings: docucache settings
        """
        self.settings = settings or DocuCacheSettings()
        self._client: redis.Redis | None = None

    @property
    def connected(self) -> bool:
        return self._client is not None

    @property
    def client(self) -> redis.Redis:
        """Get the connected client.

        Raises:
            CacheConfigurationError: If ``connect`` has not been called
        """
        if self._client is None:
            raise CacheConfigurationError("Redis client is not connected; call connect() first")
        return self._client

    async def connect(self) -> redis.Redis:
        """Create the client and verify the server responds.

        Returns:
            The connected client

        Raises:
            CacheUnavailableError: If the server can't be reached
        """
        if self._client is not None:
            return self._client

        client = redis.from_url(
            self.settings.redis_url,
            encoding="utf-8",
            decode_responses=True,
            socket_connect_timeout=self.settings.redis_connect_timeout,
            socket_timeout=self.settings.redis_socket_timeout,
            retry_on_timeout=True,
        )
        try:
            await client.ping()
        except RedisError as e:
            await client.aclose()
            raise CacheUnavailableError(
                operation="connect",
                original_error=e,
                url=self.settings.redis_url,
            ) from e

        self._client = client
        return client

    async def close(self) -> None:
        """Close the client and its connection pool."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "RedisClientManager":
        await self.connect()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()


class S3ClientManager:
    """Creates async S3 clients for the document store."""

    def __init__(self, settings: DocuCacheSettings | None = None):
        """Initialize the manager.

        Args:
            settings: docucache settings
        """
        self.settings = settings or DocuCacheSettings()
        if not self.settings.aws_bucket_name:
            raise CacheConfigurationError(missing_fields=["aws_bucket_name"])
        self._session = get_session()
        self._client_config = Config(
            s3={"addressing_style": "path"},
            retries={
                "max_attempts": self.settings.aws_retry_attempts,
                "mode": "standard",
            },
        )

    @asynccontextmanager
    async def get_async_client(self) -> AsyncGenerator[AioBaseClient, None]:
        """Get an async S3 client within a context manager.

        Yields:
            An aiobotocore S3 client

        Raises:
            StoreExecutionError: If a client operation fails
        """
        async with self._session.create_client(
            "s3",
            region_name=self.settings.aws_default_region,
            aws_access_key_id=self.settings.aws_access_key_id,
            aws_secret_access_key=self.settings.aws_secret_access_key,
            endpoint_url=self.settings.aws_url,
            config=self._client_config,
        ) as client:
            try:
                yield client
            except ClientError as e:
                raise StoreExecutionError(f"S3 client operation failed: {e}", original_error=e) from e
