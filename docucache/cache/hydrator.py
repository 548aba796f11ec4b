"""Conversion between query results and cached JSON payloads."""

import json
from typing import Any, Type, TypeVar

from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError

from docucache.cache.base import Payload
from docucache.core.exceptions import CacheSerializationError, HydrationError

M = TypeVar("M", bound=BaseModel)


def _to_document(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    return value


class Hydrator:
    """Serializes results for the cache and rebuilds documents from it.

    Payloads are plain UTF-8 JSON: one object, or an array of objects.
    There is no envelope, so any payload present is treated as valid.
    """

    def serialize(self, result: Any) -> str:
        """Serialize a store result.

        Args:
            result: A document or a list of documents

        Returns:
            The JSON payload

        Raises:
            CacheSerializationError: If the result is not JSON-serializable
        """
        try:
            if isinstance(result, (list, tuple)):
                data = [_to_document(item) for item in result]
            else:
                data = _to_document(result)
            return json.dumps(data, ensure_ascii=False)
        except (TypeError, ValueError, PydanticSerializationError) as e:
            raise CacheSerializationError(
                f"Cannot serialize {type(result).__name__} result: {e}"
            ) from e

    def hydrate(self, payload: Payload, model: Type[M]) -> M | list[M]:
        """Rebuild documents from a cached payload.

        Args:
            payload: The cached JSON payload
            model: Document class to construct

        Returns:
            A list of documents in stored order for array payloads,
            otherwise a single document

        Raises:
            HydrationError: If the payload is corrupt or does not validate
        """
        try:
            data = json.loads(payload)
        except (TypeError, ValueError) as e:
            raise HydrationError(
                f"Cached {model.__name__} payload is not valid JSON: {e}",
                model_name=model.__name__,
                original_error=e,
            ) from e

        try:
            if isinstance(data, list):
                return [model.model_validate(item) for item in data]
            return model.model_validate(data)
        except ValidationError as e:
            raise HydrationError(
                f"Cached payload does not match {model.__name__}: "
                f"{e.error_count()} validation error(s)",
                model_name=model.__name__,
                original_error=e,
            ) from e
