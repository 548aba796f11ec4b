"""Pytest fixtures for docucache testing.

To use these fixtures, add to your conftest.py:

    pytest_plugins = ["docucache.testing.fixtures"]
"""

import pytest
from typing import AsyncGenerator

from docucache.cache.interceptor import CachedQueryExecutor
from docucache.cache.keys import CacheKeyBuilder
from docucache.cache.memory import InMemoryCacheStore
from docucache.core.settings import DocuCacheSettings
from docucache.store.s3 import S3DocumentStore
from docucache.testing.mocks import InMemoryS3
from docucache.testing.utils import create_test_settings


@pytest.fixture
def docucache_settings() -> DocuCacheSettings:
    """Provide test settings for docucache."""
    return create_test_settings()


@pytest.fixture
def mock_s3() -> InMemoryS3:
    """Provide in-memory S3 mock."""
    s3 = InMemoryS3()
    yield s3
    s3.clear()


@pytest.fixture
def s3_test_bucket() -> str:
    return "test-bucket"


@pytest.fixture
async def s3_client(mock_s3: InMemoryS3, s3_test_bucket: str) -> AsyncGenerator[InMemoryS3, None]:
    """Provide an S3 client with the test bucket created."""
    await mock_s3.create_bucket(Bucket=s3_test_bucket)
    yield mock_s3


@pytest.fixture
def document_store(s3_client: InMemoryS3, s3_test_bucket: str) -> S3DocumentStore:
    """Provide a document store over the mock bucket."""
    return S3DocumentStore(s3_client, s3_test_bucket, base_path="test/")


@pytest.fixture
def cache_store() -> InMemoryCacheStore:
    """Provide an empty in-memory cache store."""
    return InMemoryCacheStore()


@pytest.fixture
async def query_cache(
    document_store: S3DocumentStore,
    cache_store: InMemoryCacheStore,
) -> AsyncGenerator[CachedQueryExecutor, None]:
    """Provide an executor over the mock store and in-memory cache.

    Yields:
        CachedQueryExecutor with pending writes drained on teardown
    """
    executor = CachedQueryExecutor(
        document_store,
        cache_store,
        key_builder=CacheKeyBuilder(prefix="test"),
    )
    yield executor
    await executor.close()
