from typing import Annotated

from pydantic import BaseModel, Field, StringConstraints

from colors_api.core.constants import COLOR_HEX_PATTERN, TITLE_MAX_LENGTH

ColorHex = Annotated[str, StringConstraints(pattern=COLOR_HEX_PATTERN)]
Title = Annotated[str, StringConstraints(min_length=1, max_length=TITLE_MAX_LENGTH)]


class CollectionSummary(BaseModel):
    """Bare id/title pair listed on a user's profile"""

    id: int
    title: str


class CollectionOut(BaseModel):
    id: int
    title: str
    owner_username: str


class CollectionDetail(CollectionOut):
    """A collection with its colors in insertion order"""

    colors: list[str] = Field(default_factory=list)


class CollectionCreate(BaseModel):
    title: Title


class CollectionRename(BaseModel):
    title: Title


class ColorAdd(BaseModel):
    color_hex: ColorHex


class ColorMembership(BaseModel):
    id: int
    color_hex: str


class CollectionRef(BaseModel):
    id: int


class CollectionDeleted(BaseModel):
    deleted: CollectionRef


class ColorDeleted(BaseModel):
    deleted: ColorMembership


class CollectionResponse(BaseModel):
    collection: CollectionOut


class CollectionDetailResponse(BaseModel):
    collection: CollectionDetail


class CollectionListResponse(BaseModel):
    collections: list[CollectionOut]


class ColorResponse(BaseModel):
    color: ColorMembership
