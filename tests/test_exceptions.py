"""Tests for docucache exceptions."""

from docucache.core.exceptions import (
    CacheConfigurationError,
    CacheKeyError,
    CacheUnavailableError,
    DocuCacheError,
    HydrationError,
    StoreExecutionError,
)


class TestExceptions:
    """Tests for the exception hierarchy."""

    def test_str_includes_hint(self):
        error = DocuCacheError("Something failed", hint="Try again")

        assert str(error) == "Something failed\nHint: Try again"

    def test_str_without_hint(self):
        assert str(DocuCacheError("Something failed")) == "Something failed"

    def test_all_inherit_from_base(self):
        for error in (
            StoreExecutionError("x"),
            CacheUnavailableError(),
            HydrationError("x"),
            CacheKeyError("x"),
            CacheConfigurationError(),
        ):
            assert isinstance(error, DocuCacheError)

    def test_cache_unavailable_message_from_operation(self):
        error = CacheUnavailableError(operation="get", original_error=ConnectionError("refused"))

        assert error.message == "Cache get failed: refused"

    def test_cache_unavailable_local_hint(self):
        error = CacheUnavailableError(url="redis://127.0.0.1:6379")

        assert "docker run" in error.hint

    def test_store_error_hint(self):
        error = StoreExecutionError("An error occurred (AccessDenied)", collection="orders")

        assert error.collection == "orders"
        assert "IAM" in error.hint

    def test_configuration_missing_fields(self):
        error = CacheConfigurationError(missing_fields=["redis_url", "aws_bucket_name"])

        assert error.message == "Missing required configuration: redis_url, aws_bucket_name"
