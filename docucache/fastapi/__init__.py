"""FastAPI integration for docucache."""

from docucache.fastapi.dependencies import clean_cache, get_query_cache, install_query_cache
from docucache.fastapi.error_handlers import register_error_handlers

__all__ = [
    "clean_cache",
    "get_query_cache",
    "install_query_cache",
    "register_error_handlers",
]
