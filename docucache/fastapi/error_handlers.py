"""FastAPI error handlers for docucache exceptions.

This module provides exception handlers that convert docucache exceptions
into properly formatted JSON responses with helpful error messages.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from docucache.core.exceptions import (
    CacheConfigurationError,
    CacheKeyError,
    CacheUnavailableError,
    DocuCacheError,
    HydrationError,
    StoreExecutionError,
)


async def docucache_exception_handler(
    request: Request,
    exc: DocuCacheError
) -> JSONResponse:
    """Handle docucache exceptions with helpful error messages.

    Args:
        request: The FastAPI request
        exc: The docucache exception

    Returns:
        JSONResponse with error details
    """
    # Determine status code based on exception type
    if isinstance(exc, CacheUnavailableError):
        status_code = 503
        error_type = "cache_unavailable"
    elif isinstance(exc, StoreExecutionError):
        status_code = 502
        error_type = "store_error"
    elif isinstance(exc, CacheKeyError):
        status_code = 400
        error_type = "invalid_query"
    elif isinstance(exc, HydrationError):
        status_code = 500
        error_type = "corrupt_cache_entry"
    elif isinstance(exc, CacheConfigurationError):
        status_code = 500
        error_type = "configuration_error"
    else:
        status_code = 500
        error_type = "internal_error"

    content = {
        "error": error_type,
        "message": exc.message,
    }

    if exc.hint:
        content["hint"] = exc.hint

    headers = {}
    if isinstance(exc, CacheUnavailableError):
        headers["Retry-After"] = "1"

    return JSONResponse(
        status_code=status_code,
        content=content,
        headers=headers if headers else None,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register docucache error handlers with a FastAPI app.

    Args:
        app: The FastAPI application
    """
    app.add_exception_handler(DocuCacheError, docucache_exception_handler)
