"""S3-backed document store.

Documents are stored as JSON objects at ``<base_path><collection>/<id>.json``.
Queries list the collection prefix, load each object and match it against
the predicate in memory.
"""

import json
import logging
from contextlib import aclosing
from typing import Any, Mapping, Type, TypeVar

from botocore.exceptions import ClientError
from pydantic import ValidationError

from docucache.core.document import BaseDocument
from docucache.core.exceptions import StoreExecutionError
from docucache.core.query import Query

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseDocument)

_MISSING = object()


def _resolve(document: Mapping[str, Any], path: str) -> Any:
    """Look up a dotted field path in a document."""
    value: Any = document
    for part in path.split("."):
        if not isinstance(value, Mapping) or part not in value:
            return _MISSING
        value = value[part]
    return value


def matches(document: Mapping[str, Any], predicate: Mapping[str, Any]) -> bool:
    """Check whether a raw document satisfies a predicate.

    Supported conditions are field equality, ``{"$in": [...]}`` and
    ``{"$ne": value}``. Field names may be dotted paths.

    Args:
        document: The stored JSON document
        predicate: The query predicate

    Returns:
        True if every condition holds
    """
    for path, condition in predicate.items():
        value = _resolve(document, path)
        if isinstance(condition, Mapping) and condition and all(
            isinstance(k, str) and k.startswith("$") for k in condition
        ):
            for operator, operand in condition.items():
                if operator == "$in":
                    if not isinstance(operand, (list, tuple, set, frozenset)):
                        raise ValueError(f"$in expects a list, got {type(operand).__name__}")
                    if value is _MISSING or value not in list(operand):
                        return False
                elif operator == "$ne":
                    if value is not _MISSING and value == operand:
                        return False
                else:
                    raise ValueError(f"Unsupported operator: {operator}")
        elif value is _MISSING or value != condition:
            return False
    return True


class S3DocumentStore:
    """Document store that keeps each document as an S3 object.

    The S3 client is passed in (an aiobotocore client, or ``InMemoryS3`` in
    tests); this class never creates one.
    """

    def __init__(self, s3_client, bucket_name: str, base_path: str = ""):
        """Initialize the store.

        Args:
            s3_client: An async S3 client
            bucket_name: Bucket holding the documents
            base_path: Key prefix for all collections
        """
        self.s3_client = s3_client
        self.bucket_name = bucket_name
        self.base_path = base_path

    def collection_prefix(self, collection: str) -> str:
        return f"{self.base_path}{collection}/"

    def object_key(self, collection: str, document_id: Any) -> str:
        return f"{self.collection_prefix(collection)}{document_id}.json"

    async def execute(self, query: Query[T]) -> list[T] | T | None:
        """Execute a query against the bucket.

        Args:
            query: The query to run

        Returns:
            Matching documents in key order; for ``single`` queries the
            first match or None

        Raises:
            StoreExecutionError: If S3 fails or a stored document is invalid
        """
        collection = query.collection_name
        limit = 1 if query.single else query.limit
        results: list[T] = []

        if limit != 0:
            async with aclosing(self._iter_documents(collection)) as documents:
                async for raw in documents:
                    try:
                        matched = matches(raw, query.predicate)
                    except ValueError as e:
                        raise StoreExecutionError(
                            f"Invalid predicate for {collection}: {e}",
                            collection=collection,
                            original_error=e,
                        ) from e
                    if not matched:
                        continue
                    results.append(self._build(query.model, raw, collection))
                    if limit is not None and len(results) >= limit:
                        break

        if query.single:
            return results[0] if results else None
        return results

    async def save(self, document: BaseDocument, collection: str | None = None) -> BaseDocument:
        """Create or replace a document.

        Args:
            document: The document to store
            collection: Overrides the document's collection

        Returns:
            The stored document
        """
        collection = collection or document.collection_name()
        key = self.object_key(collection, document.id)
        try:
            await self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=document.model_dump_json(by_alias=True).encode("utf-8"),
                ContentType="application/json",
            )
        except ClientError as e:
            raise StoreExecutionError(
                f"Failed to save {key}: {e}", collection=collection, original_error=e
            ) from e
        return document

    async def delete(self, model: Type[BaseDocument], document_id: Any, collection: str | None = None) -> None:
        """Delete a document by id.

        Args:
            model: The document class
            document_id: The document id
            collection: Overrides the model's collection
        """
        collection = collection or model.collection_name()
        key = self.object_key(collection, document_id)
        try:
            await self.s3_client.delete_object(Bucket=self.bucket_name, Key=key)
        except ClientError as e:
            raise StoreExecutionError(
                f"Failed to delete {key}: {e}", collection=collection, original_error=e
            ) from e

    async def _iter_documents(self, collection: str):
        prefix = self.collection_prefix(collection)
        token = None
        try:
            while True:
                kwargs = {"Bucket": self.bucket_name, "Prefix": prefix}
                if token:
                    kwargs["ContinuationToken"] = token
                response = await self.s3_client.list_objects_v2(**kwargs)

                for item in response.get("Contents", []):
                    if not item["Key"].endswith(".json"):
                        continue
                    obj = await self.s3_client.get_object(
                        Bucket=self.bucket_name, Key=item["Key"]
                    )
                    body = await obj["Body"].read()
                    try:
                        yield json.loads(body.decode("utf-8"))
                    except ValueError as e:
                        logger.warning(f"Skipping unreadable document {item['Key']}: {e}")

                if not response.get("IsTruncated"):
                    break
                token = response.get("NextContinuationToken")
        except ClientError as e:
            raise StoreExecutionError(
                f"Failed to read collection {collection}: {e}",
                collection=collection,
                original_error=e,
            ) from e

    def _build(self, model: Type[T], raw: dict, collection: str) -> T:
        try:
            return model.model_validate(raw)
        except ValidationError as e:
            raise StoreExecutionError(
                f"Stored document in {collection} does not match {model.__name__}: {e}",
                collection=collection,
                original_error=e,
            ) from e
