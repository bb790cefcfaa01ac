"""
User repository: parameterized queries over the users table.

Every function takes the psycopg connection as its first argument and
raises the typed failures from ``colors_api.core.exceptions``.
"""

import logging
from collections.abc import Mapping
from typing import Any

from psycopg import AsyncConnection, sql
from psycopg.rows import dict_row

from colors_api.core.constants import USER_COLUMN_ALIASES, USER_UPDATABLE_FIELDS
from colors_api.core.exceptions import AuthenticationError, DuplicateError, NotFoundError
from colors_api.db.sql import compile_update
from colors_api.schemas.collection import CollectionSummary
from colors_api.schemas.user import UserDetail, UserPublic
from colors_api.utils.auth import hash_password, verify_password

logger = logging.getLogger(__name__)


async def authenticate(conn: AsyncConnection, username: str, password: str) -> UserPublic:
    """
    Check a username/password pair against the stored digest.

    Raises:
        AuthenticationError: unknown username or wrong password
    """
    async with conn.cursor(row_factory=dict_row) as cur:
        await cur.execute(
            """
            SELECT username, password_digest, first_name, last_name, is_admin
            FROM users
            WHERE username = %s
        """,
            (username,),
        )
        row = await cur.fetchone()

    if row:
        digest = row.pop("password_digest")
        if verify_password(password, digest):
            return UserPublic(**row)

    logger.warning(f"Failed login attempt for user {username}")
    raise AuthenticationError("Invalid username/password")


async def register(
    conn: AsyncConnection,
    *,
    username: str,
    password: str,
    first_name: str,
    last_name: str,
    is_admin: bool,
    work_factor: int,
) -> UserPublic:
    """
    Create a user, storing a bcrypt digest of the password.

    The insert is a single statement guarded by the primary key, so two
    concurrent registrations of one username cannot both succeed.

    Raises:
        DuplicateError: username already taken
    """
    digest = hash_password(password, work_factor)

    async with conn.cursor(row_factory=dict_row) as cur:
        await cur.execute(
            """
            INSERT INTO users (username, password_digest, first_name, last_name, is_admin)
            VALUES (%s, %s, %s, %s, %s)
            ON CONFLICT (username) DO NOTHING
            RETURNING username, first_name, last_name, is_admin
        """,
            (username, digest, first_name, last_name, is_admin),
        )
        row = await cur.fetchone()

    if not row:
        raise DuplicateError(f"Duplicate username: {username}")

    await conn.commit()
    logger.info(f"Registered user {username} (admin={is_admin})")
    return UserPublic(**row)


async def find_all(conn: AsyncConnection) -> list[UserPublic]:
    """All users ordered by username."""
    async with conn.cursor(row_factory=dict_row) as cur:
        await cur.execute(
            """
            SELECT username, first_name, last_name, is_admin
            FROM users
            ORDER BY username
        """
        )
        rows = await cur.fetchall()

    return [UserPublic(**row) for row in rows]


async def exists(conn: AsyncConnection, username: str) -> bool:
    async with conn.cursor() as cur:
        await cur.execute("SELECT 1 FROM users WHERE username = %s", (username,))
        return await cur.fetchone() is not None


async def get(conn: AsyncConnection, username: str) -> UserDetail:
    """
    Get a user and the id/title of every collection they own.

    Raises:
        NotFoundError: no such user
    """
    async with conn.cursor(row_factory=dict_row) as cur:
        await cur.execute(
            """
            SELECT username, first_name, last_name, is_admin
            FROM users
            WHERE username = %s
        """,
            (username,),
        )
        user = await cur.fetchone()

        if not user:
            raise NotFoundError(f"No user: {username}")

        await cur.execute(
            """
            SELECT id, title
            FROM collections
            WHERE creator_username = %s
            ORDER BY id
        """,
            (username,),
        )
        collections = await cur.fetchall()

    return UserDetail(**user, collections=[CollectionSummary(**c) for c in collections])


async def update(
    conn: AsyncConnection,
    username: str,
    data: Mapping[str, Any],
    *,
    work_factor: int,
) -> UserPublic:
    """
    Partially update a user.

    Only first_name, last_name, password and is_admin are applied; other
    keys are dropped. A new password is stored as its digest.

    WARNING: this can set a password or grant admin. Callers must have
    checked that the caller is allowed to do so.

    Raises:
        InvalidUpdateError: nothing left to update after filtering
        NotFoundError: no such user
    """
    fields = {key: value for key, value in data.items() if key in USER_UPDATABLE_FIELDS}
    if "password" in fields:
        if fields["password"]:
            fields["password"] = hash_password(fields["password"], work_factor)
        else:
            del fields["password"]

    update_sql = compile_update(fields, USER_COLUMN_ALIASES)
    query = sql.SQL(
        """
            UPDATE users
            SET {set_clause}
            WHERE username = %s
            RETURNING username, first_name, last_name, is_admin
        """
    ).format(set_clause=update_sql.clause)

    async with conn.cursor(row_factory=dict_row) as cur:
        await cur.execute(query, update_sql.params(username))
        row = await cur.fetchone()

    if not row:
        raise NotFoundError(f"No user: {username}")

    await conn.commit()
    logger.info(f"Updated user {username}: {', '.join(sorted(fields))}")
    return UserPublic(**row)


async def remove(conn: AsyncConnection, username: str) -> None:
    """
    Delete a user; their collections and colors go with them.

    Raises:
        NotFoundError: no such user
    """
    async with conn.cursor() as cur:
        await cur.execute(
            "DELETE FROM users WHERE username = %s RETURNING username",
            (username,),
        )
        row = await cur.fetchone()

    if not row:
        raise NotFoundError(f"No user: {username}")

    await conn.commit()
    logger.info(f"Removed user {username}")
