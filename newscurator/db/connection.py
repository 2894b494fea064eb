"""Pooled PostgreSQL connections."""

from contextlib import contextmanager
from typing import Any, Dict, Generator, Optional

import psycopg
from psycopg.conninfo import make_conninfo
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool


def build_conninfo(config: Dict[str, Any]) -> str:
    """Connection string from a resolved postgres config dict (see ``Config.get_db_config``)."""
    return make_conninfo(
        host=config.get("host", "localhost"),
        port=config.get("port", 5432),
        dbname=config.get("database", "newscurator"),
        user=config.get("user", "newscurator"),
        password=config.get("password") or "",
    )


_connection_pool: Optional[ConnectionPool] = None


def get_connection_pool(config: Dict[str, Any]) -> ConnectionPool:
    """Get or create the process-wide pool."""
    global _connection_pool
    if _connection_pool is None:
        _connection_pool = ConnectionPool(
            build_conninfo(config),
            min_size=1,
            max_size=4,
            kwargs={"row_factory": dict_row},
            open=True,
        )
    return _connection_pool


def close_connection_pool() -> None:
    """Close the pool, if one was opened."""
    global _connection_pool
    if _connection_pool is not None:
        _connection_pool.close()
        _connection_pool = None


@contextmanager
def get_connection(config: Dict[str, Any]) -> Generator[psycopg.Connection, None, None]:
    """Borrow a connection from the pool."""
    pool = get_connection_pool(config)
    with pool.connection() as conn:
        yield conn
