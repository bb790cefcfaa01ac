from fastapi import APIRouter, Depends, status
from psycopg import AsyncConnection

from colors_api.config import Settings, get_app_settings
from colors_api.database import get_db
from colors_api.schemas.auth import RegisterRequest, Token, TokenRequest
from colors_api.services.auth_service import AuthService

router = APIRouter()


@router.post("/token", response_model=Token)
async def get_token(
    credentials: TokenRequest,
    conn: AsyncConnection = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> Token:
    """Exchange a username and password for a bearer token"""
    token = await AuthService(conn, settings).login(credentials.username, credentials.password)
    return Token(token=token)


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: RegisterRequest,
    conn: AsyncConnection = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> Token:
    """Self-registration; the new user is never an admin"""
    _, token = await AuthService(conn, settings).register(
        username=user_data.username,
        password=user_data.password,
        first_name=user_data.first_name,
        last_name=user_data.last_name,
        is_admin=False,
    )
    return Token(token=token)
