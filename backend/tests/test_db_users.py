"""
Unit tests for the user repository (colors_api/db/users.py).

Queries run against a mocked psycopg connection; see test_users_queries.py
for the same operations against a real database.
"""

import pytest

from colors_api.core.constants import BCRYPT_MIN_ROUNDS
from colors_api.core.exceptions import (
    AuthenticationError,
    DuplicateError,
    InvalidUpdateError,
    NotFoundError,
)
from colors_api.db import users as users_db
from colors_api.schemas.user import UserDetail, UserPublic
from colors_api.utils.auth import hash_password, verify_password

U1 = {"username": "u1", "first_name": "FN1", "last_name": "LN1", "is_admin": True}
U2 = {"username": "u2", "first_name": "FN2", "last_name": "LN2", "is_admin": False}


class TestAuthenticate:
    @pytest.mark.asyncio
    async def test_valid_credentials(self, mock_conn):
        """Test matching password returns the public fields."""
        mock_conn.mock_cursor.fetchone.return_value = {
            **U1,
            "password_digest": hash_password("password1", BCRYPT_MIN_ROUNDS),
        }

        user = await users_db.authenticate(mock_conn, "u1", "password1")

        assert user == UserPublic(**U1)
        assert "password_digest" not in user.model_dump()

    @pytest.mark.asyncio
    async def test_wrong_password(self, mock_conn):
        mock_conn.mock_cursor.fetchone.return_value = {
            **U1,
            "password_digest": hash_password("password1", BCRYPT_MIN_ROUNDS),
        }

        with pytest.raises(AuthenticationError, match="Invalid username/password"):
            await users_db.authenticate(mock_conn, "u1", "wrong")

    @pytest.mark.asyncio
    async def test_unknown_username(self, mock_conn):
        """Test unknown users fail the same way as wrong passwords."""
        mock_conn.mock_cursor.fetchone.return_value = None

        with pytest.raises(AuthenticationError, match="Invalid username/password"):
            await users_db.authenticate(mock_conn, "nope", "password1")


class TestRegister:
    @pytest.mark.asyncio
    async def test_register_stores_digest(self, mock_conn):
        """Test the password is hashed before insert and the result has no digest."""
        mock_conn.mock_cursor.fetchone.return_value = U2

        user = await users_db.register(
            mock_conn,
            username="u2",
            password="password2",
            first_name="FN2",
            last_name="LN2",
            is_admin=False,
            work_factor=BCRYPT_MIN_ROUNDS,
        )

        assert user == UserPublic(**U2)
        _, params = mock_conn.mock_cursor.execute.call_args.args
        assert params[0] == "u2"
        assert params[1] != "password2"
        assert verify_password("password2", params[1])
        assert params[4] is False
        mock_conn.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_register_duplicate(self, mock_conn):
        """Test a username conflict inserts nothing and raises DuplicateError."""
        mock_conn.mock_cursor.fetchone.return_value = None

        with pytest.raises(DuplicateError, match="Duplicate username: u1"):
            await users_db.register(
                mock_conn,
                username="u1",
                password="password1",
                first_name="FN1",
                last_name="LN1",
                is_admin=False,
                work_factor=BCRYPT_MIN_ROUNDS,
            )

        mock_conn.commit.assert_not_awaited()


class TestFindAll:
    @pytest.mark.asyncio
    async def test_find_all(self, mock_conn):
        mock_conn.mock_cursor.fetchall.return_value = [U1, U2]

        users = await users_db.find_all(mock_conn)

        assert users == [UserPublic(**U1), UserPublic(**U2)]
        query = mock_conn.mock_cursor.execute.call_args.args[0]
        assert "ORDER BY username" in query

    @pytest.mark.asyncio
    async def test_find_all_empty(self, mock_conn):
        mock_conn.mock_cursor.fetchall.return_value = []

        assert await users_db.find_all(mock_conn) == []


class TestGet:
    @pytest.mark.asyncio
    async def test_get_with_collections(self, mock_conn):
        mock_conn.mock_cursor.fetchone.return_value = U1
        mock_conn.mock_cursor.fetchall.return_value = [
            {"id": 1, "title": "coll-u1-1"},
            {"id": 2, "title": "coll-u1-2"},
        ]

        user = await users_db.get(mock_conn, "u1")

        assert isinstance(user, UserDetail)
        assert user.username == "u1"
        assert [(c.id, c.title) for c in user.collections] == [(1, "coll-u1-1"), (2, "coll-u1-2")]

    @pytest.mark.asyncio
    async def test_get_without_collections(self, mock_conn):
        mock_conn.mock_cursor.fetchone.return_value = U2
        mock_conn.mock_cursor.fetchall.return_value = []

        user = await users_db.get(mock_conn, "u2")

        assert user.collections == []

    @pytest.mark.asyncio
    async def test_get_not_found(self, mock_conn):
        mock_conn.mock_cursor.fetchone.return_value = None

        with pytest.raises(NotFoundError, match="No user: nope"):
            await users_db.get(mock_conn, "nope")


class TestUpdate:
    @pytest.mark.asyncio
    async def test_update_drops_unknown_fields_and_hashes_password(self, mock_conn):
        mock_conn.mock_cursor.fetchone.return_value = {**U2, "first_name": "New"}

        user = await users_db.update(
            mock_conn,
            "u2",
            {"first_name": "New", "password": "newpass", "username": "hijack", "bogus": 1},
            work_factor=BCRYPT_MIN_ROUNDS,
        )

        assert user.first_name == "New"
        _, params = mock_conn.mock_cursor.execute.call_args.args
        assert len(params) == 3
        assert params[0] == "New"
        assert verify_password("newpass", params[1])
        assert params[2] == "u2"
        mock_conn.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_does_not_mutate_input(self, mock_conn):
        mock_conn.mock_cursor.fetchone.return_value = U2
        data = {"password": "newpass"}

        await users_db.update(mock_conn, "u2", data, work_factor=BCRYPT_MIN_ROUNDS)

        assert data == {"password": "newpass"}

    @pytest.mark.asyncio
    async def test_update_only_unknown_fields(self, mock_conn):
        """Test nothing left after filtering is an invalid update."""
        with pytest.raises(InvalidUpdateError):
            await users_db.update(
                mock_conn, "u2", {"username": "x"}, work_factor=BCRYPT_MIN_ROUNDS
            )

        mock_conn.mock_cursor.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_empty(self, mock_conn):
        with pytest.raises(InvalidUpdateError):
            await users_db.update(mock_conn, "u2", {}, work_factor=BCRYPT_MIN_ROUNDS)

    @pytest.mark.asyncio
    async def test_update_empty_password_is_ignored(self, mock_conn):
        mock_conn.mock_cursor.fetchone.return_value = {**U2, "is_admin": True}

        await users_db.update(
            mock_conn, "u2", {"password": "", "is_admin": True}, work_factor=BCRYPT_MIN_ROUNDS
        )

        _, params = mock_conn.mock_cursor.execute.call_args.args
        assert params == [True, "u2"]

    @pytest.mark.asyncio
    async def test_update_not_found(self, mock_conn):
        mock_conn.mock_cursor.fetchone.return_value = None

        with pytest.raises(NotFoundError, match="No user: nope"):
            await users_db.update(
                mock_conn, "nope", {"first_name": "X"}, work_factor=BCRYPT_MIN_ROUNDS
            )

        mock_conn.commit.assert_not_awaited()


class TestRemove:
    @pytest.mark.asyncio
    async def test_remove(self, mock_conn):
        mock_conn.mock_cursor.fetchone.return_value = ("u2",)

        assert await users_db.remove(mock_conn, "u2") is None
        mock_conn.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_remove_not_found(self, mock_conn):
        mock_conn.mock_cursor.fetchone.return_value = None

        with pytest.raises(NotFoundError, match="No user: nope"):
            await users_db.remove(mock_conn, "nope")
