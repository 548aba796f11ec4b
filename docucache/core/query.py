"""Immutable query values and their cache options.

A ``Query`` describes one read against one collection. Cache behaviour is
carried in an embedded ``CacheOptions`` value; every builder method returns
a new query, so a query shared between callers never changes underneath them.

Example:
    active = query(Order, {"status": "active"}).cache(scope_key="user:42")
    orders = await executor.execute(active)
"""

import copy
from dataclasses import dataclass, field, replace
from typing import Any, Generic, Mapping, Type, TypeVar

from docucache.core.document import BaseDocument

T = TypeVar("T", bound=BaseDocument)


@dataclass(frozen=True)
class CacheOptions:
    """Per-query cache configuration.

    Attributes:
        enabled: Whether the query goes through the read-through path
        scope_key: Partition the cached result lives under
    """

    enabled: bool = False
    scope_key: Any = ""


@dataclass(frozen=True)
class Query(Generic[T]):
    """A read against a single collection.

    Attributes:
        model: Document class results are built as
        predicate: Opaque, JSON-shaped filter
        single: Return the first match (or None) instead of a list
        limit: Maximum number of documents to return
        collection: Overrides ``model.collection_name()``
        cache_options: Read-through configuration
    """

    model: Type[T]
    predicate: Mapping[str, Any] = field(default_factory=dict)
    single: bool = False
    limit: int | None = None
    collection: str | None = None
    cache_options: CacheOptions = field(default_factory=CacheOptions)

    def __post_init__(self) -> None:
        if self.limit is not None and self.limit < 0:
            raise ValueError("limit must be non-negative")
        # Detach from the caller's dict so later edits can't change the shape
        object.__setattr__(self, "predicate", copy.deepcopy(dict(self.predicate)))

    @property
    def collection_name(self) -> str:
        return self.collection or self.model.collection_name()

    @property
    def cacheable(self) -> bool:
        return self.cache_options.enabled

    @property
    def scope_key(self) -> Any:
        return self.cache_options.scope_key

    def key_options(self) -> dict[str, Any]:
        """Get the non-default options that change the result shape."""
        options: dict[str, Any] = {}
        if self.single:
            options["single"] = True
        if self.limit is not None:
            options["limit"] = self.limit
        return options

    def cache(self, scope_key: Any = "") -> "Query[T]":
        """Return a copy of this query that uses the cache.

        Args:
            scope_key: Partition for the cached result (e.g. a user id)

        Returns:
            A new cacheable query
        """
        return replace(
            self, cache_options=CacheOptions(enabled=True, scope_key=scope_key)
        )

    def no_cache(self) -> "Query[T]":
        """Return a copy of this query that bypasses the cache."""
        return replace(self, cache_options=CacheOptions())

    def filter(self, **fields: Any) -> "Query[T]":
        """Return a copy with extra equality conditions merged in."""
        return replace(self, predicate={**self.predicate, **fields})

    def first(self) -> "Query[T]":
        """Return a copy that yields a single document."""
        return replace(self, single=True)

    def limit_to(self, limit: int) -> "Query[T]":
        """Return a copy capped at ``limit`` documents."""
        return replace(self, limit=limit)


def query(
    model: Type[T],
    predicate: Mapping[str, Any] | None = None,
    **kwargs: Any,
) -> Query[T]:
    """Create a query for a document class.

    Args:
        model: The document class
        predicate: Filter to apply
        **kwargs: Other ``Query`` fields

    Returns:
        A non-cacheable query
    """
    return Query(model=model, predicate=predicate or {}, **kwargs)


def mark_cacheable(q: Query[T], scope_key: Any = "") -> Query[T]:
    """Opt a query into the read-through path."""
    return q.cache(scope_key)
