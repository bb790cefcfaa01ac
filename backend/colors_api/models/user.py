from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from colors_api.database import Base

if TYPE_CHECKING:
    from colors_api.models.collection import Collection


class User(Base):
    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(30), primary_key=True)
    password_digest: Mapped[str] = mapped_column(Text)
    first_name: Mapped[str] = mapped_column(String(30))
    last_name: Mapped[str] = mapped_column(String(30))
    is_admin: Mapped[bool] = mapped_column(Boolean, default=False, server_default="false")

    # Relationships
    collections: Mapped[list[Collection]] = relationship(
        back_populates="creator", passive_deletes=True
    )
