"""
Food Ordering Backend — MenuItem SQLAlchemy Model
===================================================

What:  ORM model representing the `menu_items` table.
Who:   Used by CatalogStore and by Alembic for schema management.

Table Design:
    - seq: integer surrogate primary key, increasing with each insert;
      listing orders by it so the catalog comes back in storage order
    - id: public UUID identifier exposed through the API (unique index)
    - price: FLOAT so JSON output stays numeric
"""

import uuid
from typing import Optional

from sqlalchemy import CheckConstraint, Float, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from food_ordering.database import Base


class MenuItem(Base):
    """A dish on the menu. Created, updated and deleted through /api/menus."""

    __tablename__ = "menu_items"

    seq: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        nullable=False,
        unique=True,
        index=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(String(200), nullable=False)

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    price: Mapped[float] = mapped_column(Float, nullable=False)

    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    image_url: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True)

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_menu_items_price_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<MenuItem(id={self.id}, name='{self.name}', price={self.price})>"
