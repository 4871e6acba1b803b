"""Catalog tables: categories and products."""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from libs.common.datetime_utils import utc_now
from libs.db.base import Base
from services.storefront_service.models.column_types import StringList
from sqlalchemy import Boolean, DateTime, Integer, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column


class Category(Base):
    """Product categories (e.g., 'Vestidos', 'Zapatos')."""

    __tablename__ = "categories"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    slug: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    is_visible: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default="true"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )

    def __repr__(self):
        return f"<Category {self.slug}>"


class Product(Base):
    """Catalog products.

    ``category`` holds the category slug rather than a foreign key; sizes are
    stored as legacy tokens ("M", "mujer-7").
    """

    __tablename__ = "products"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    sku: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    sizes: Mapped[list[str]] = mapped_column(StringList, default=list)
    colors: Mapped[list[str]] = mapped_column(StringList, default=list)
    materials: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    images: Mapped[list[str]] = mapped_column(StringList, default=list)

    stock: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    is_in_stock: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default="false"
    )
    is_visible: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default="true"
    )
    is_new: Mapped[bool] = mapped_column(Boolean, default=False, server_default="false")
    is_premium: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default="false"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    def __repr__(self):
        return f"<Product {self.sku or self.id}>"
