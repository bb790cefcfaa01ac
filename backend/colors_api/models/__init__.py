from colors_api.models.collection import Collection
from colors_api.models.collection_color import CollectionColor
from colors_api.models.user import User

__all__ = [
    "User",
    "Collection",
    "CollectionColor",
]
