"""Testing utilities for docucache applications.

This module provides utilities for testing code that uses docucache,
including an in-memory S3 mock, store and cache doubles, and fixtures.

Usage in conftest.py:
    from docucache.testing import InMemoryS3, RecordingStore, create_test_settings

Or use provided fixtures directly:
    pytest_plugins = ["docucache.testing.fixtures"]
"""

from docucache.testing.mocks import FlakyCacheStore, InMemoryS3, RecordingStore, mock_s3_client
from docucache.testing.utils import create_test_settings, seed_documents

__all__ = [
    "InMemoryS3",
    "RecordingStore",
    "FlakyCacheStore",
    "mock_s3_client",
    "create_test_settings",
    "seed_documents",
]
