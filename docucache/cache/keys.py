"""Cache key generation utilities for docucache."""

import hashlib
import json
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping
from uuid import UUID

from pydantic import BaseModel

from docucache.core.exceptions import CacheKeyError

COLLECTION_FIELD = "collection"


def _check_keys(value: Any) -> None:
    """Reject mappings with non-string keys, which JSON would stringify."""
    if isinstance(value, Mapping):
        for k, v in value.items():
            if not isinstance(k, str):
                raise TypeError(f"Mapping key {k!r} is not a string")
            _check_keys(v)
    elif isinstance(value, (list, tuple)):
        for item in value:
            _check_keys(item)


def _json_serializer(obj: Any) -> Any:
    """Deterministic JSON serializer for cache key generation."""
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    elif isinstance(obj, (UUID, Decimal)):
        return str(obj)
    elif isinstance(obj, Enum):
        return obj.value
    elif isinstance(obj, (set, frozenset)):
        return sorted(obj, key=canonical_json)
    elif isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    # str() of arbitrary objects may embed an address, which breaks determinism
    raise TypeError(f"Object of type {type(obj).__name__} is not key-serializable")


def canonical_json(value: Any) -> str:
    """Serialize a value with sorted keys and no insignificant whitespace.

    Args:
        value: A JSON-shaped value

    Returns:
        The canonical JSON string

    Raises:
        CacheKeyError: If the value contains unsupported types
    """
    try:
        _check_keys(value)
        return json.dumps(
            value,
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
            default=_json_serializer,
        )
    except (TypeError, ValueError, RecursionError) as e:
        raise CacheKeyError(f"Cannot build cache key: {e}", value=value) from e


class CacheKeyBuilder:
    """Utility class for building consistent cache keys.

    This class provides methods for generating cache keys that are:
    - Identical for structurally equal predicates, whatever their key order
    - Distinct across collections
    - Human-readable for debugging (unless hashing is enabled)
    """

    def __init__(self, prefix: str = "docucache", hash_keys: bool = False):
        """Initialize the key builder.

        Args:
            prefix: Global prefix for partition names
            hash_keys: Replace composite keys with their SHA-256 digest
        """
        self.prefix = prefix
        self.hash_keys = hash_keys

    def compose(
        self,
        predicate: Mapping[str, Any],
        collection: str,
        options: Mapping[str, Any] | None = None,
    ) -> str:
        """Generate the composite key for a query.

        The plain form is the canonical JSON of the predicate with the
        collection merged in, e.g. ``{"collection":"orders","status":"active"}``.
        If the predicate already uses the ``collection`` field, or shape
        options are given, the form is a JSON array
        ``[collection, predicate, options]`` instead, which can never equal an
        object form.

        Values are compared by their JSON form, so ``UUID(x)`` and ``str(x)``
        share a key while ``1`` and ``1.0`` do not. Mappings with non-string
        keys are rejected.

        Args:
            predicate: The query predicate (not modified)
            collection: Target collection identifier
            options: Result-shape options such as ``single`` or ``limit``

        Returns:
            The composite key

        Raises:
            CacheKeyError: If the predicate holds unsupported values
        """
        if options or COLLECTION_FIELD in predicate:
            shape: Any = [collection, dict(predicate), dict(options or {})]
        else:
            shape = {**predicate, COLLECTION_FIELD: collection}

        key = canonical_json(shape)
        if self.hash_keys:
            return hashlib.sha256(key.encode("utf-8")).hexdigest()
        return key

    def partition(self, scope_key: Any = "") -> str:
        """Generate the partition name for a scope.

        Args:
            scope_key: Caller-chosen scope, e.g. ``"user:42"``

        Returns:
            Partition like ``docucache:scope:"user:42"``
        """
        return f"{self.prefix}:scope:{canonical_json(scope_key)}"


# Default key builder instance
_key_builder: CacheKeyBuilder | None = None


def get_key_builder() -> CacheKeyBuilder:
    """Get the default cache key builder.

    Returns:
        The CacheKeyBuilder instance
    """
    global _key_builder
    if _key_builder is None:
        _key_builder = CacheKeyBuilder()
    return _key_builder


def set_key_builder(builder: CacheKeyBuilder) -> None:
    """Set the default cache key builder.

    Args:
        builder: The CacheKeyBuilder instance to use
    """
    global _key_builder
    _key_builder = builder
