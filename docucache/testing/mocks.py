"""Mocks for testing docucache applications."""

import asyncio
import json
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Callable, Dict
from unittest.mock import AsyncMock

from botocore.exceptions import ClientError

from docucache.cache.base import Payload
from docucache.cache.memory import InMemoryCacheStore
from docucache.core.exceptions import CacheUnavailableError
from docucache.core.query import Query


class InMemoryS3:
    """In-memory S3 mock for testing without external dependencies.

    Implements the S3 operations ``S3DocumentStore`` uses.

    Example:
        >>> s3 = InMemoryS3()
        >>> await s3.put_object(Bucket="test", Key="orders/1.json", Body=b'{"id": 1}')
        >>> response = await s3.get_object(Bucket="test", Key="orders/1.json")
        >>> data = await response["Body"].read()
    """

    def __init__(self):
        """Initialize the in-memory S3 mock."""
        # Storage: {bucket_name: {key: bytes}}
        self._storage: Dict[str, Dict[str, bytes]] = {}
        self.fail_with: str | None = None
        self.get_calls = 0

    def _ensure_bucket(self, bucket: str) -> None:
        if bucket not in self._storage:
            self._storage[bucket] = {}

    def _maybe_fail(self, operation: str) -> None:
        if self.fail_with:
            raise ClientError(
                {"Error": {"Code": self.fail_with, "Message": "Injected failure"}},
                operation,
            )

    async def create_bucket(self, Bucket: str, **kwargs) -> dict:
        self._ensure_bucket(Bucket)
        return {}

    async def put_object(
        self,
        Bucket: str,
        Key: str,
        Body: bytes | str,
        **kwargs
    ) -> dict:
        """Store an object in the mock S3.

        Args:
            Bucket: The bucket name
            Key: The object key
            Body: The object data (bytes or string)

        Returns:
            Dict with ETag
        """
        self._maybe_fail("PutObject")
        self._ensure_bucket(Bucket)

        if isinstance(Body, str):
            Body = Body.encode("utf-8")

        self._storage[Bucket][Key] = Body
        return {"ETag": f'"{hash(Body)}"'}

    async def get_object(self, Bucket: str, Key: str, **kwargs) -> dict:
        """Retrieve an object from the mock S3.

        Raises:
            ClientError: If object doesn't exist
        """
        self._maybe_fail("GetObject")
        self.get_calls += 1
        if Bucket not in self._storage or Key not in self._storage[Bucket]:
            raise ClientError(
                {"Error": {"Code": "NoSuchKey", "Message": "The specified key does not exist."}},
                "GetObject"
            )

        body = AsyncMock()
        body.read = AsyncMock(return_value=self._storage[Bucket][Key])
        return {
            "Body": body,
            "ContentLength": len(self._storage[Bucket][Key]),
            "LastModified": datetime.now(timezone.utc),
        }

    async def delete_object(self, Bucket: str, Key: str, **kwargs) -> dict:
        self._maybe_fail("DeleteObject")
        self._storage.get(Bucket, {}).pop(Key, None)
        return {}

    async def list_objects_v2(
        self,
        Bucket: str,
        Prefix: str = "",
        MaxKeys: int = 1000,
        ContinuationToken: str | None = None,
        **kwargs
    ) -> dict:
        """List objects in a bucket.

        Args:
            Bucket: The bucket name
            Prefix: Filter by key prefix
            MaxKeys: Maximum number of keys to return
            ContinuationToken: Pagination token

        Returns:
            Dict with Contents and pagination info
        """
        self._maybe_fail("ListObjectsV2")
        if Bucket not in self._storage:
            raise ClientError(
                {"Error": {"Code": "NoSuchBucket", "Message": "The specified bucket does not exist"}},
                "ListObjectsV2"
            )

        all_keys = sorted(key for key in self._storage[Bucket] if key.startswith(Prefix))

        start_idx = int(ContinuationToken) if ContinuationToken else 0
        end_idx = start_idx + MaxKeys
        page_keys = all_keys[start_idx:end_idx]

        result = {
            "Contents": [
                {"Key": key, "Size": len(self._storage[Bucket][key])}
                for key in page_keys
            ],
            "KeyCount": len(page_keys),
            "IsTruncated": end_idx < len(all_keys),
        }
        if result["IsTruncated"]:
            result["NextContinuationToken"] = str(end_idx)
        return result

    def clear(self) -> None:
        """Clear all stored data."""
        self._storage.clear()

    def get_bucket_data(self, bucket: str) -> dict:
        """Get all data in a bucket (for testing assertions)."""
        return {
            key: json.loads(data.decode("utf-8"))
            for key, data in self._storage.get(bucket, {}).items()
            if data
        }


class RecordingStore:
    """Document store double that records every executed query.

    Results come from ``handler(query)``; the default returns an empty list.
    An optional ``delay`` makes concurrent executions overlap.
    """

    def __init__(
        self,
        handler: Callable[[Query], Any] | None = None,
        delay: float = 0.0,
    ):
        self.handler = handler or (lambda query: [])
        self.delay = delay
        self.calls: list[Query] = []

    @property
    def call_count(self) -> int:
        return len(self.calls)

    async def execute(self, query: Query) -> Any:
        self.calls.append(query)
        if self.delay:
            await asyncio.sleep(self.delay)
        return self.handler(query)


class FlakyCacheStore(InMemoryCacheStore):
    """In-memory cache store that can be told to fail.

    Set ``fail_get``, ``fail_set`` or ``fail_delete`` to make the matching
    operation raise ``CacheUnavailableError``.
    """

    def __init__(self, fail_get: bool = False, fail_set: bool = False, fail_delete: bool = False):
        super().__init__()
        self.fail_get = fail_get
        self.fail_set = fail_set
        self.fail_delete = fail_delete

    async def get(self, partition: str, key: str) -> Payload | None:
        if self.fail_get:
            raise CacheUnavailableError(operation="get", original_error=ConnectionError("down"))
        return await super().get(partition, key)

    async def set(self, partition: str, key: str, payload: Payload) -> None:
        if self.fail_set:
            raise CacheUnavailableError(operation="set", original_error=ConnectionError("down"))
        await super().set(partition, key, payload)

    async def delete_partition(self, partition: str) -> bool:
        if self.fail_delete:
            raise CacheUnavailableError(
                operation="delete_partition", original_error=ConnectionError("down")
            )
        return await super().delete_partition(partition)


@contextmanager
def mock_s3_client():
    """Context manager providing an in-memory S3 mock.

    Yields:
        InMemoryS3 instance
    """
    mock = InMemoryS3()
    try:
        yield mock
    finally:
        mock.clear()
