"""Persistence for stored articles and app metadata."""

from .articles import ArticleStorage
from .connection import close_connection_pool, get_connection, get_connection_pool
from .init import init_database, validate_connection
from .repository import ArticleRepository

__all__ = [
    "ArticleRepository",
    "ArticleStorage",
    "close_connection_pool",
    "get_connection",
    "get_connection_pool",
    "init_database",
    "validate_connection",
]
