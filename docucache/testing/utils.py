"""Testing utilities for docucache applications."""

from typing import Iterable

from docucache.core.document import BaseDocument
from docucache.core.settings import DocuCacheSettings
from docucache.store.s3 import S3DocumentStore


def create_test_settings(
    bucket_name: str = "test-bucket",
    base_path: str = "test/",
    **overrides
) -> DocuCacheSettings:
    """Create docucache settings for testing.

    Args:
        bucket_name: The S3 bucket name for tests
        base_path: The S3 base path for tests
        **overrides: Additional settings to override

    Returns:
        DocuCacheSettings instance configured for testing
    """
    values = {
        "redis_url": "redis://localhost:6379/15",
        "key_prefix": "test",
        "aws_bucket_name": bucket_name,
        "aws_access_key_id": "testing",
        "aws_secret_access_key": "testing",
        "aws_default_region": "us-east-1",
        "aws_url": "http://localhost:4566",
        "s3_base_path": base_path,
    }
    values.update(overrides)
    return DocuCacheSettings(**values)


async def seed_documents(
    store: S3DocumentStore,
    documents: Iterable[BaseDocument],
) -> list[BaseDocument]:
    """Save documents into a store, in order.

    Returns:
        The saved documents
    """
    return [await store.save(document) for document in documents]
