"""Document store implementations for docucache."""

from docucache.store.base import DocumentStore
from docucache.store.s3 import S3DocumentStore

__all__ = ["DocumentStore", "S3DocumentStore"]
