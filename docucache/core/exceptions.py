"""Custom exceptions for docucache.

This module provides a hierarchy of exceptions with helpful error messages
to make debugging cache behaviour easier for developers.
"""


class DocuCacheError(Exception):
    """Base exception for all docucache errors.

    All docucache exceptions inherit from this class, making it easy
    to catch all cache-layer errors.
    """

    def __init__(self, message: str, hint: str | None = None):
        """Initialize the exception.

        Args:
            message: The error message
            hint: Optional hint for resolving the error
        """
        self.message = message
        self.hint = hint
        super().__init__(message)

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message}\nHint: {self.hint}"
        return self.message


class StoreExecutionError(DocuCacheError):
    """Raised when the underlying document store fails to execute a query."""

    def __init__(
        self,
        message: str,
        collection: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the store execution error.

        Args:
            message: The error message
            collection: The collection the query targeted
            original_error: The original exception
        """
        self.collection = collection
        self.original_error = original_error

        hint = None
        if "NoSuchBucket" in message:
            hint = "The configured bucket does not exist."
        elif "AccessDenied" in message:
            hint = "Check your IAM permissions for this operation."

        super().__init__(message, hint)


class CacheUnavailableError(DocuCacheError):
    """Raised when the cache backend cannot be reached.

    This wraps transport errors from the backend client together with
    the operation that failed.
    """

    def __init__(
        self,
        message: str | None = None,
        operation: str | None = None,
        original_error: Exception | None = None,
        url: str | None = None,
    ):
        """Initialize the cache unavailable error.

        Args:
            message: Custom error message (optional)
            operation: The cache operation that failed (e.g. 'get')
            original_error: The original exception that caused this error
            url: The cache backend URL
        """
        self.operation = operation
        self.original_error = original_error
        self.url = url

        if message:
            final_message = message
        elif operation and original_error:
            final_message = f"Cache {operation} failed: {original_error}"
        else:
            final_message = "Cache backend is unavailable"

        hint = None
        if url and ("127.0.0.1" in url or "localhost" in url):
            hint = "If using a local Redis, ensure it's running: docker run -d -p 6379:6379 redis"
        elif original_error is not None and "Authentication" in str(original_error):
            hint = "Check the credentials in DOCUCACHE_REDIS_URL."

        super().__init__(final_message, hint)


class HydrationError(DocuCacheError):
    """Raised when a cached payload cannot be turned back into documents."""

    def __init__(
        self,
        message: str,
        model_name: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the hydration error.

        Args:
            message: The error message
            model_name: The document class being built
            original_error: The original decode or validation error
        """
        self.model_name = model_name
        self.original_error = original_error
        super().__init__(
            message,
            "The cached entry is corrupt or the model changed shape. "
            "Invalidate the scope it lives under to rebuild it.",
        )


class CacheSerializationError(DocuCacheError):
    """Raised when a query result cannot be serialized for caching."""


class CacheKeyError(DocuCacheError):
    """Raised when a cache key cannot be composed from a query."""

    def __init__(self, message: str, value: object = None):
        """Initialize the key error.

        Args:
            message: The error message
            value: The offending value
        """
        self.value = value
        super().__init__(
            message,
            "Predicates and scope keys must contain only JSON-compatible values.",
        )


class CacheConfigurationError(DocuCacheError):
    """Raised when docucache configuration is invalid."""

    def __init__(
        self,
        message: str | None = None,
        missing_fields: list[str] | None = None,
    ):
        """Initialize the configuration error.

        Args:
            message: Custom error message
            missing_fields: List of missing configuration fields
        """
        self.missing_fields = missing_fields or []

        if missing_fields:
            fields_str = ", ".join(missing_fields)
            message = f"Missing required configuration: {fields_str}"
            hint = "Set these as DOCUCACHE_* environment variables or in your .env file."
        else:
            hint = "Check your docucache configuration."

        super().__init__(message or "Invalid docucache configuration", hint)
