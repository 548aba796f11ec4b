"""Document store protocol for docucache."""

from typing import Any, Protocol, runtime_checkable

from docucache.core.query import Query


@runtime_checkable
class DocumentStore(Protocol):
    """Anything that can execute a query.

    ``execute`` returns a list of documents, or a single document (or None)
    for queries built with ``Query.first()``.
    """

    async def execute(self, query: Query) -> Any:
        """Execute a query against the store."""
        ...
