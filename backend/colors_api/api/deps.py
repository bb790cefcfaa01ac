"""
Route guards wrapping the permission checks as FastAPI dependencies.

Each guard returns the caller's identity once the check passes, so routes
can depend on the guard and use the identity directly.
"""

from fastapi import Depends
from psycopg import AsyncConnection

from colors_api.core.permissions import (
    ensure_admin,
    ensure_logged_in,
    ensure_owner_or_admin,
    ensure_self_or_admin,
)
from colors_api.database import get_db
from colors_api.schemas.auth import Identity
from colors_api.utils.auth import get_current_identity


async def require_logged_in(
    identity: Identity | None = Depends(get_current_identity),
) -> Identity:
    ensure_logged_in(identity)
    return identity


async def require_admin(
    identity: Identity | None = Depends(get_current_identity),
) -> Identity:
    ensure_admin(identity)
    return identity


async def require_self_or_admin(
    username: str,
    identity: Identity | None = Depends(get_current_identity),
) -> Identity:
    """Guard for /users/{username} routes"""
    ensure_self_or_admin(identity, username)
    return identity


async def require_collection_owner_or_admin(
    collection_id: int,
    identity: Identity = Depends(require_logged_in),
    conn: AsyncConnection = Depends(get_db),
) -> Identity:
    """Guard for /collections/{collection_id} routes"""
    await ensure_owner_or_admin(conn, identity, collection_id)
    return identity
