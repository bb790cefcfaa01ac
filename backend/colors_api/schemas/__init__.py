from colors_api.schemas.auth import Identity, RegisterRequest, Token, TokenRequest
from colors_api.schemas.collection import (
    CollectionCreate,
    CollectionDetail,
    CollectionOut,
    CollectionRename,
    CollectionSummary,
    ColorAdd,
    ColorMembership,
)
from colors_api.schemas.user import UserCreate, UserDetail, UserPublic, UserUpdate

__all__ = [
    "Identity",
    "TokenRequest",
    "RegisterRequest",
    "Token",
    "UserCreate",
    "UserUpdate",
    "UserPublic",
    "UserDetail",
    "CollectionCreate",
    "CollectionRename",
    "CollectionOut",
    "CollectionDetail",
    "CollectionSummary",
    "ColorAdd",
    "ColorMembership",
]
