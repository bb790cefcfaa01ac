from pydantic import BaseModel, ConfigDict, Field

from colors_api.core.constants import NAME_MAX_LENGTH, PASSWORD_MIN_LENGTH, USERNAME_MAX_LENGTH
from colors_api.schemas.collection import CollectionSummary


class UserPublic(BaseModel):
    """User fields safe to return to clients (never the password digest)"""

    username: str
    first_name: str
    last_name: str
    is_admin: bool


class UserDetail(UserPublic):
    """A user together with the collections they own"""

    collections: list[CollectionSummary] = Field(default_factory=list)


class UserCreate(BaseModel):
    """Schema for an admin creating a user"""

    username: str = Field(min_length=1, max_length=USERNAME_MAX_LENGTH)
    password: str = Field(min_length=PASSWORD_MIN_LENGTH)
    first_name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    last_name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    is_admin: bool


class UserUpdate(BaseModel):
    """Schema for a partial user update; only provided fields change"""

    model_config = ConfigDict(extra="forbid")

    first_name: str | None = Field(default=None, min_length=1, max_length=NAME_MAX_LENGTH)
    last_name: str | None = Field(default=None, min_length=1, max_length=NAME_MAX_LENGTH)
    password: str | None = Field(default=None, min_length=PASSWORD_MIN_LENGTH)
    is_admin: bool | None = None


class UserResponse(BaseModel):
    user: UserPublic


class UserDetailResponse(BaseModel):
    user: UserDetail


class UserListResponse(BaseModel):
    users: list[UserPublic]


class UserCreatedResponse(BaseModel):
    user: UserPublic
    token: str


class UserDeletedResponse(BaseModel):
    deleted: str
