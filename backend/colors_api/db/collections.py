"""
Collection repository: parameterized queries over collections and their
color memberships.

Writes that could race (owner existence, duplicate colors) are single
statements backed by the table constraints rather than check-then-insert.
"""

import logging
import re

from psycopg import AsyncConnection, errors, sql
from psycopg.rows import dict_row

from colors_api.core.constants import COLOR_HEX_PATTERN
from colors_api.core.exceptions import BadRequestError, DuplicateError, NotFoundError
from colors_api.db import users as users_db
from colors_api.db.sql import compile_update
from colors_api.schemas.collection import (
    CollectionDeleted,
    CollectionDetail,
    CollectionOut,
    CollectionRef,
    ColorDeleted,
    ColorMembership,
)

logger = logging.getLogger(__name__)

_COLOR_HEX_RE = re.compile(COLOR_HEX_PATTERN)


def _check_color_hex(color_hex: str) -> None:
    if not isinstance(color_hex, str) or not _COLOR_HEX_RE.match(color_hex):
        raise BadRequestError(f"Invalid color hex: {color_hex!r}")


async def create(conn: AsyncConnection, title: str, owner_username: str) -> CollectionOut:
    """
    Create a collection owned by an existing user.

    Raises:
        NotFoundError: owner does not exist
    """
    try:
        async with conn.cursor(row_factory=dict_row) as cur:
            # Inserts nothing when the owner is missing
            await cur.execute(
                """
                INSERT INTO collections (title, creator_username)
                SELECT %s, username FROM users WHERE username = %s
                RETURNING id, title, creator_username AS owner_username
            """,
                (title, owner_username),
            )
            row = await cur.fetchone()
    except errors.ForeignKeyViolation:
        # Owner deleted between the SELECT and the INSERT
        await conn.rollback()
        raise NotFoundError(f"No user: {owner_username}")

    if not row:
        raise NotFoundError(f"No user: {owner_username}")

    await conn.commit()
    logger.info(f"Created collection {row['id']} for {owner_username}")
    return CollectionOut(**row)


async def get_owner(conn: AsyncConnection, collection_id: int) -> str:
    """
    Username owning a collection.

    Raises:
        NotFoundError: no such collection
    """
    async with conn.cursor() as cur:
        await cur.execute(
            "SELECT creator_username FROM collections WHERE id = %s",
            (collection_id,),
        )
        row = await cur.fetchone()

    if not row:
        raise NotFoundError(f"No collection: {collection_id}")

    return row[0]


async def get_single(conn: AsyncConnection, collection_id: int) -> CollectionDetail:
    """
    Get a collection with its colors in the order they were added.

    Raises:
        NotFoundError: no such collection
    """
    async with conn.cursor(row_factory=dict_row) as cur:
        await cur.execute(
            """
            SELECT id, title, creator_username AS owner_username
            FROM collections
            WHERE id = %s
        """,
            (collection_id,),
        )
        collection = await cur.fetchone()

        if not collection:
            raise NotFoundError(f"No collection: {collection_id}")

        await cur.execute(
            """
            SELECT color_hex
            FROM collections_colors
            WHERE collection_id = %s
            ORDER BY position
        """,
            (collection_id,),
        )
        colors = await cur.fetchall()

    return CollectionDetail(**collection, colors=[c["color_hex"] for c in colors])


async def get_all_by_user(conn: AsyncConnection, owner_username: str) -> list[CollectionOut]:
    """
    All collections owned by a user.

    Raises:
        NotFoundError: user does not exist
    """
    if not await users_db.exists(conn, owner_username):
        raise NotFoundError(f"No user: {owner_username}")

    async with conn.cursor(row_factory=dict_row) as cur:
        await cur.execute(
            """
            SELECT id, title, creator_username AS owner_username
            FROM collections
            WHERE creator_username = %s
            ORDER BY id
        """,
            (owner_username,),
        )
        rows = await cur.fetchall()

    return [CollectionOut(**row) for row in rows]


async def get_all(conn: AsyncConnection) -> list[CollectionOut]:
    """All collections regardless of owner."""
    async with conn.cursor(row_factory=dict_row) as cur:
        await cur.execute(
            """
            SELECT id, title, creator_username AS owner_username
            FROM collections
            ORDER BY id
        """
        )
        rows = await cur.fetchall()

    return [CollectionOut(**row) for row in rows]


async def rename(conn: AsyncConnection, collection_id: int, new_title: str) -> CollectionOut:
    """
    Change a collection's title.

    Raises:
        NotFoundError: no such collection
    """
    update_sql = compile_update({"title": new_title})
    query = sql.SQL(
        """
            UPDATE collections
            SET {set_clause}
            WHERE id = %s
            RETURNING id, title, creator_username AS owner_username
        """
    ).format(set_clause=update_sql.clause)

    async with conn.cursor(row_factory=dict_row) as cur:
        await cur.execute(query, update_sql.params(collection_id))
        row = await cur.fetchone()

    if not row:
        raise NotFoundError(f"No collection: {collection_id}")

    await conn.commit()
    logger.info(f"Renamed collection {collection_id}")
    return CollectionOut(**row)


async def add_color(conn: AsyncConnection, collection_id: int, color_hex: str) -> ColorMembership:
    """
    Add a color to a collection.

    Raises:
        BadRequestError: color_hex is not six hex characters
        NotFoundError: no such collection
        DuplicateError: the collection already has this color
    """
    _check_color_hex(color_hex)

    try:
        async with conn.cursor(row_factory=dict_row) as cur:
            await cur.execute(
                """
                INSERT INTO collections_colors (collection_id, color_hex)
                SELECT id, %s FROM collections WHERE id = %s
                ON CONFLICT (collection_id, color_hex) DO NOTHING
                RETURNING collection_id AS id, color_hex
            """,
                (color_hex, collection_id),
            )
            row = await cur.fetchone()
    except errors.ForeignKeyViolation:
        # Collection deleted between the SELECT and the INSERT
        await conn.rollback()
        raise NotFoundError(f"No collection: {collection_id}")

    if not row:
        # Nothing inserted: either the collection is missing or the pair exists
        await get_owner(conn, collection_id)
        raise DuplicateError(f"Duplicate color {color_hex} in collection {collection_id}")

    await conn.commit()
    logger.info(f"Added color {color_hex} to collection {collection_id}")
    return ColorMembership(**row)


async def remove_color(conn: AsyncConnection, collection_id: int, color_hex: str) -> ColorDeleted:
    """
    Remove a color from a collection.

    Raises:
        NotFoundError: the collection does not have this color
    """
    async with conn.cursor(row_factory=dict_row) as cur:
        await cur.execute(
            """
            DELETE FROM collections_colors
            WHERE collection_id = %s AND color_hex = %s
            RETURNING collection_id AS id, color_hex
        """,
            (collection_id, color_hex),
        )
        row = await cur.fetchone()

    if not row:
        raise NotFoundError(f"No color {color_hex} in collection {collection_id}")

    await conn.commit()
    logger.info(f"Removed color {color_hex} from collection {collection_id}")
    return ColorDeleted(deleted=ColorMembership(**row))


async def remove(conn: AsyncConnection, collection_id: int) -> CollectionDeleted:
    """
    Delete a collection and its color memberships.

    Raises:
        NotFoundError: no such collection
    """
    async with conn.cursor() as cur:
        await cur.execute(
            "DELETE FROM collections WHERE id = %s RETURNING id",
            (collection_id,),
        )
        row = await cur.fetchone()

    if not row:
        raise NotFoundError(f"No collection: {collection_id}")

    await conn.commit()
    logger.info(f"Removed collection {collection_id}")
    return CollectionDeleted(deleted=CollectionRef(id=row[0]))
