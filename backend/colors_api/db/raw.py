"""
Raw database connection pool using psycopg3.
Every repository query runs on a connection borrowed from this pool.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import psycopg_pool
from psycopg import AsyncConnection

from colors_api.config import Settings

logger = logging.getLogger(__name__)

# Global connection pool
pool: psycopg_pool.AsyncConnectionPool | None = None


async def init_pool(settings: Settings) -> None:
    """Initialize the psycopg3 async connection pool."""
    global pool

    logger.info("Initializing psycopg3 connection pool")
    pool = psycopg_pool.AsyncConnectionPool(
        settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        open=False,  # Don't open immediately, we'll do it explicitly
    )
    await pool.open()
    logger.info("psycopg3 connection pool initialized")


async def close_pool() -> None:
    """Close the connection pool."""
    global pool
    if pool:
        logger.info("Closing psycopg3 connection pool")
        await pool.close()
        pool = None


@asynccontextmanager
async def get_conn() -> AsyncGenerator[AsyncConnection, None]:
    """
    Get a connection from the pool.

    Usage:
        async with get_conn() as conn:
            async with conn.cursor() as cur:
                await cur.execute("SELECT ...")
    """
    if pool is None:
        raise RuntimeError("Connection pool not initialized. Call init_pool() first.")

    async with pool.connection() as conn:
        yield conn
