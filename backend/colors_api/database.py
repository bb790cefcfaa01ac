from collections.abc import AsyncGenerator

from psycopg import AsyncConnection
from sqlalchemy.orm import DeclarativeBase

from colors_api.db.raw import get_conn


class Base(DeclarativeBase):
    pass


async def get_db() -> AsyncGenerator[AsyncConnection, None]:
    """FastAPI dependency yielding a pooled psycopg connection."""
    async with get_conn() as conn:
        yield conn
