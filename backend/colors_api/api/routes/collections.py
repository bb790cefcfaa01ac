from fastapi import APIRouter, Depends, Path, status
from psycopg import AsyncConnection

from colors_api.api.deps import (
    require_admin,
    require_collection_owner_or_admin,
    require_logged_in,
)
from colors_api.core.constants import COLOR_HEX_PATTERN
from colors_api.database import get_db
from colors_api.db import collections as collections_db
from colors_api.schemas.auth import Identity
from colors_api.schemas.collection import (
    CollectionCreate,
    CollectionDeleted,
    CollectionDetailResponse,
    CollectionListResponse,
    CollectionRename,
    CollectionResponse,
    ColorAdd,
    ColorDeleted,
    ColorResponse,
)

router = APIRouter()


@router.post("", response_model=CollectionResponse, status_code=status.HTTP_201_CREATED)
async def create_collection(
    data: CollectionCreate,
    identity: Identity = Depends(require_logged_in),
    conn: AsyncConnection = Depends(get_db),
) -> CollectionResponse:
    """Create a collection owned by the caller"""
    collection = await collections_db.create(conn, data.title, identity.username)
    return CollectionResponse(collection=collection)


@router.get("", response_model=CollectionListResponse)
async def list_collections(
    _: Identity = Depends(require_admin),
    conn: AsyncConnection = Depends(get_db),
) -> CollectionListResponse:
    """List every collection"""
    return CollectionListResponse(collections=await collections_db.get_all(conn))


@router.get("/{collection_id}", response_model=CollectionDetailResponse)
async def get_collection(
    collection_id: int,
    _: Identity = Depends(require_collection_owner_or_admin),
    conn: AsyncConnection = Depends(get_db),
) -> CollectionDetailResponse:
    """Get a collection and its colors"""
    return CollectionDetailResponse(collection=await collections_db.get_single(conn, collection_id))


@router.patch("/{collection_id}", response_model=CollectionResponse)
async def rename_collection(
    collection_id: int,
    data: CollectionRename,
    _: Identity = Depends(require_collection_owner_or_admin),
    conn: AsyncConnection = Depends(get_db),
) -> CollectionResponse:
    """Rename a collection"""
    collection = await collections_db.rename(conn, collection_id, data.title)
    return CollectionResponse(collection=collection)


@router.delete("/{collection_id}", response_model=CollectionDeleted)
async def delete_collection(
    collection_id: int,
    _: Identity = Depends(require_collection_owner_or_admin),
    conn: AsyncConnection = Depends(get_db),
) -> CollectionDeleted:
    """Delete a collection and its colors"""
    return await collections_db.remove(conn, collection_id)


@router.post(
    "/{collection_id}/colors",
    response_model=ColorResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_color(
    collection_id: int,
    data: ColorAdd,
    _: Identity = Depends(require_collection_owner_or_admin),
    conn: AsyncConnection = Depends(get_db),
) -> ColorResponse:
    """Add a color to a collection"""
    color = await collections_db.add_color(conn, collection_id, data.color_hex)
    return ColorResponse(color=color)


@router.delete("/{collection_id}/colors/{color_hex}", response_model=ColorDeleted)
async def remove_color(
    collection_id: int,
    color_hex: str = Path(pattern=COLOR_HEX_PATTERN),
    _: Identity = Depends(require_collection_owner_or_admin),
    conn: AsyncConnection = Depends(get_db),
) -> ColorDeleted:
    """Remove a color from a collection"""
    return await collections_db.remove_color(conn, collection_id, color_hex)
