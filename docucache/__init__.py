"""docucache: a read-through query cache for document stores."""

__version__ = "0.1.0"

# Core components
from docucache.core.client import RedisClientManager, S3ClientManager
from docucache.core.document import BaseDocument
from docucache.core.exceptions import (
    DocuCacheError,
    StoreExecutionError,
    CacheUnavailableError,
    HydrationError,
    CacheSerializationError,
    CacheKeyError,
    CacheConfigurationError,
)
from docucache.core.query import CacheOptions, Query, mark_cacheable, query
from docucache.core.settings import DocuCacheSettings

# Cache components
from docucache.cache import (
    CacheStore,
    InMemoryCacheStore,
    RedisCacheStore,
    CacheKeyBuilder,
    Hydrator,
    CachedQueryExecutor,
    Invalidator,
)

# Store components
from docucache.store import DocumentStore, S3DocumentStore

from docucache.factory import build_executor, create_document_store, create_query_cache

__all__ = [
    # Version
    "__version__",
    # Core
    "BaseDocument",
    "DocuCacheSettings",
    "RedisClientManager",
    "S3ClientManager",
    "Query",
    "CacheOptions",
    "query",
    "mark_cacheable",
    "DocuCacheError",
    "StoreExecutionError",
    "CacheUnavailableError",
    "HydrationError",
    "CacheSerializationError",
    "CacheKeyError",
    "CacheConfigurationError",
    # Cache
    "CacheStore",
    "InMemoryCacheStore",
    "RedisCacheStore",
    "CacheKeyBuilder",
    "Hydrator",
    "CachedQueryExecutor",
    "Invalidator",
    # Store
    "DocumentStore",
    "S3DocumentStore",
    # Wiring
    "build_executor",
    "create_query_cache",
    "create_document_store",
]
