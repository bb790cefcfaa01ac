"""
Permission checks deciding whether the calling identity may act on a target.

Each check returns None when the caller is allowed and raises
AuthorizationError otherwise. ``identity`` is None for anonymous callers.
"""

from psycopg import AsyncConnection

from colors_api.core.exceptions import AuthorizationError
from colors_api.db import collections as collections_db
from colors_api.schemas.auth import Identity


def ensure_logged_in(identity: Identity | None) -> None:
    if identity is None:
        raise AuthorizationError()


def ensure_admin(identity: Identity | None) -> None:
    if identity is None or not identity.is_admin:
        raise AuthorizationError()


def ensure_self_or_admin(identity: Identity | None, target_username: str) -> None:
    """Caller is the target user, or an admin."""
    if identity is None or not (identity.is_admin or identity.username == target_username):
        raise AuthorizationError()


async def ensure_owner_or_admin(
    conn: AsyncConnection, identity: Identity | None, collection_id: int
) -> None:
    """
    Caller owns the collection, or is an admin.

    The owner is looked up first, so a missing collection raises
    NotFoundError even for callers who would not be allowed to see it.
    """
    owner = await collections_db.get_owner(conn, collection_id)
    if identity is None or not (identity.is_admin or identity.username == owner):
        raise AuthorizationError("Unauthorized: current user does not own this collection")
