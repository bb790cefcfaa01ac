from psycopg import AsyncConnection

from colors_api.config import Settings
from colors_api.db import users as users_db
from colors_api.schemas.auth import Identity
from colors_api.schemas.user import UserPublic
from colors_api.utils.auth import create_access_token


def issue_token(user: UserPublic | Identity, settings: Settings) -> str:
    """Sign a token for a user; is_admin is always taken from the user record"""
    return create_access_token(
        Identity(username=user.username, is_admin=user.is_admin), settings
    )


class AuthService:
    """Credential checks and user registration, each ending in a fresh token"""

    def __init__(self, conn: AsyncConnection, settings: Settings):
        self.conn = conn
        self.settings = settings

    async def login(self, username: str, password: str) -> str:
        """Exchange credentials for a token; raises AuthenticationError on mismatch"""
        user = await users_db.authenticate(self.conn, username, password)
        return issue_token(user, self.settings)

    async def register(
        self,
        *,
        username: str,
        password: str,
        first_name: str,
        last_name: str,
        is_admin: bool,
    ) -> tuple[UserPublic, str]:
        """Create a user and a token for them; raises DuplicateError for taken usernames"""
        user = await users_db.register(
            self.conn,
            username=username,
            password=password,
            first_name=first_name,
            last_name=last_name,
            is_admin=is_admin,
            work_factor=self.settings.bcrypt_work_factor,
        )
        return user, issue_token(user, self.settings)
