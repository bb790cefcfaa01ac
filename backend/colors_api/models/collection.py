from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from colors_api.database import Base

if TYPE_CHECKING:
    from colors_api.models.collection_color import CollectionColor
    from colors_api.models.user import User


class Collection(Base):
    __tablename__ = "collections"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(100))
    creator_username: Mapped[str] = mapped_column(
        String(30), ForeignKey("users.username", ondelete="CASCADE"), index=True
    )

    # Relationships
    creator: Mapped[User] = relationship(back_populates="collections")
    colors: Mapped[list[CollectionColor]] = relationship(
        back_populates="collection",
        order_by="CollectionColor.position",
        passive_deletes=True,
    )
