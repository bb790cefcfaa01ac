from fastapi import APIRouter, Depends, status
from psycopg import AsyncConnection

from colors_api.api.deps import require_admin, require_self_or_admin
from colors_api.config import Settings, get_app_settings
from colors_api.core.exceptions import AuthorizationError
from colors_api.database import get_db
from colors_api.db import collections as collections_db
from colors_api.db import users as users_db
from colors_api.schemas.auth import Identity
from colors_api.schemas.collection import CollectionListResponse
from colors_api.schemas.user import (
    UserCreate,
    UserCreatedResponse,
    UserDeletedResponse,
    UserDetailResponse,
    UserListResponse,
    UserResponse,
    UserUpdate,
)
from colors_api.services.auth_service import AuthService

router = APIRouter()


@router.post("", response_model=UserCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    data: UserCreate,
    _: Identity = Depends(require_admin),
    conn: AsyncConnection = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> UserCreatedResponse:
    """
    Admin-only user creation. Unlike /auth/register, the new user may be an admin.
    """
    user, token = await AuthService(conn, settings).register(
        username=data.username,
        password=data.password,
        first_name=data.first_name,
        last_name=data.last_name,
        is_admin=data.is_admin,
    )
    return UserCreatedResponse(user=user, token=token)


@router.get("", response_model=UserListResponse)
async def list_users(
    _: Identity = Depends(require_admin),
    conn: AsyncConnection = Depends(get_db),
) -> UserListResponse:
    """List all users"""
    return UserListResponse(users=await users_db.find_all(conn))


@router.get("/{username}", response_model=UserDetailResponse)
async def get_user(
    username: str,
    _: Identity = Depends(require_self_or_admin),
    conn: AsyncConnection = Depends(get_db),
) -> UserDetailResponse:
    """Get a user with the id and title of each collection they own"""
    return UserDetailResponse(user=await users_db.get(conn, username))


@router.patch("/{username}", response_model=UserResponse)
async def update_user(
    username: str,
    data: UserUpdate,
    identity: Identity = Depends(require_self_or_admin),
    conn: AsyncConnection = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> UserResponse:
    """Partially update a user; only admins may change is_admin"""
    fields = data.model_dump(exclude_none=True)
    if "is_admin" in fields and not identity.is_admin:
        raise AuthorizationError("Unauthorized: only admins may change admin status")

    user = await users_db.update(
        conn, username, fields, work_factor=settings.bcrypt_work_factor
    )
    return UserResponse(user=user)


@router.delete("/{username}", response_model=UserDeletedResponse)
async def delete_user(
    username: str,
    _: Identity = Depends(require_self_or_admin),
    conn: AsyncConnection = Depends(get_db),
) -> UserDeletedResponse:
    """Delete a user along with their collections"""
    await users_db.remove(conn, username)
    return UserDeletedResponse(deleted=username)


@router.get("/{username}/collections", response_model=CollectionListResponse)
async def list_user_collections(
    username: str,
    _: Identity = Depends(require_self_or_admin),
    conn: AsyncConnection = Depends(get_db),
) -> CollectionListResponse:
    """All collections owned by a user"""
    return CollectionListResponse(
        collections=await collections_db.get_all_by_user(conn, username)
    )
