"""FastAPI dependencies for docucache.

Example:
    app = FastAPI()
    install_query_cache(app, executor)

    @app.post("/orders", dependencies=[Depends(clean_cache(current_user_id))])
    async def create_order(...):
        ...
"""

import inspect
from collections.abc import AsyncGenerator
from typing import Any, Awaitable, Callable

from fastapi import Depends, FastAPI, Request

from docucache.cache.interceptor import CachedQueryExecutor
from docucache.core.exceptions import CacheConfigurationError
from docucache.fastapi.error_handlers import register_error_handlers

ScopeResolver = Callable[[Request], Any | Awaitable[Any]]


def install_query_cache(app: FastAPI, executor: CachedQueryExecutor) -> None:
    """Attach an executor to an app and register error handlers.

    Args:
        app: The FastAPI application
        executor: The executor routes will use
    """
    app.state.query_cache = executor
    register_error_handlers(app)


def get_query_cache(request: Request) -> CachedQueryExecutor:
    """FastAPI dependency returning the app's executor.

    Raises:
        CacheConfigurationError: If ``install_query_cache`` was not called
    """
    executor = getattr(request.app.state, "query_cache", None)
    if executor is None:
        raise CacheConfigurationError("No query cache installed on this app")
    return executor


def clean_cache(scope_resolver: ScopeResolver):
    """Create a dependency that invalidates a scope after the route runs.

    The scope is resolved from the request before the handler runs, and
    only invalidated if the handler finishes without raising.

    Args:
        scope_resolver: Returns the scope key for a request, e.g. the user id

    Returns:
        A dependency for ``Depends``
    """

    async def dependency(
        request: Request,
        executor: CachedQueryExecutor = Depends(get_query_cache),
    ) -> AsyncGenerator[None, None]:
        scope_key = scope_resolver(request)
        if inspect.isawaitable(scope_key):
            scope_key = await scope_key
        yield
        await executor.invalidate(scope_key)

    return dependency
