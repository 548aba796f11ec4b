"""Base document model for docucache."""

import re
import uuid
from datetime import datetime, timezone
from typing import ClassVar

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseDocument(BaseModel):
    """Base class for documents returned by the store.

    Subclasses set ``_plural_name`` to choose the collection they live in.
    When it is not set the collection is the snake_case class name with an
    ``s`` appended.

    Example:
        class Order(BaseDocument):
            _plural_name: ClassVar[str] = "orders"

            status: str
            total: float
    """

    _plural_name: ClassVar[str | None] = None

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @classmethod
    def collection_name(cls) -> str:
        """Get the collection identifier for this document class."""
        if cls._plural_name:
            return cls._plural_name
        snake = re.sub(r"(?<!^)(?=[A-Z])", "_", cls.__name__).lower()
        return f"{snake}s"

    def touch(self) -> None:
        """Refresh ``updated_at``."""
        self.updated_at = _utcnow()
