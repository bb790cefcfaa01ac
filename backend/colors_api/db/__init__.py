"""Database utilities using psycopg3 for parameterized queries."""

from colors_api.db.raw import close_pool, get_conn, init_pool
from colors_api.db.sql import PartialUpdate, compile_update

__all__ = [
    "init_pool",
    "close_pool",
    "get_conn",
    "compile_update",
    "PartialUpdate",
]
