import logging
from datetime import datetime, timedelta, timezone
from functools import lru_cache

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext

from colors_api.config import Settings, get_app_settings
from colors_api.core.constants import BCRYPT_MIN_ROUNDS
from colors_api.schemas.auth import Identity

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


@lru_cache
def get_pwd_context(work_factor: int) -> CryptContext:
    """bcrypt context hashing with the given number of rounds"""
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=work_factor)


def hash_password(password: str, work_factor: int) -> str:
    """Hash a password using bcrypt"""
    return get_pwd_context(work_factor).hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash"""
    # Rounds are read from the digest itself, so any context verifies it
    return get_pwd_context(BCRYPT_MIN_ROUNDS).verify(plain_password, hashed_password)


def create_access_token(identity: Identity, settings: Settings) -> str:
    """Create a signed JWT carrying the caller's username and admin flag"""
    issued_at = datetime.now(timezone.utc)
    to_encode = {
        "username": identity.username,
        "is_admin": identity.is_admin,
        "iat": issued_at,
    }
    if settings.access_token_expire_minutes is not None:
        to_encode["exp"] = issued_at + timedelta(minutes=settings.access_token_expire_minutes)
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str | None, settings: Settings) -> Identity | None:
    """
    Decode a JWT into the caller's identity.

    A missing token and an invalid one (bad signature, expired, malformed)
    both yield None; anonymous callers are rejected later by the
    permission checks that need an identity.
    """
    if not token:
        return None

    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.debug(f"Ignoring invalid token: {e}")
        return None

    username = payload.get("username")
    if not isinstance(username, str) or not username:
        return None

    return Identity(username=username, is_admin=payload.get("is_admin") is True)


async def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    settings: Settings = Depends(get_app_settings),
) -> Identity | None:
    """Identity decoded from the bearer token, or None for anonymous callers"""
    token = credentials.credentials if credentials else None
    return decode_token(token, settings)
