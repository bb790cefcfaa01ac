from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, CheckConstraint, ForeignKey, Identity, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from colors_api.database import Base

if TYPE_CHECKING:
    from colors_api.models.collection import Collection


class CollectionColor(Base):
    __tablename__ = "collections_colors"
    __table_args__ = (
        CheckConstraint("color_hex ~ '^[0-9a-fA-F]{6}$'", name="ck_collections_colors_hex"),
    )

    collection_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("collections.id", ondelete="CASCADE"), primary_key=True
    )
    color_hex: Mapped[str] = mapped_column(String(6), primary_key=True)
    position: Mapped[int] = mapped_column(BigInteger, Identity(), unique=True)  # Insertion order

    # Relationships
    collection: Mapped[Collection] = relationship(back_populates="colors")
