"""Product accessors.

``is_in_stock`` is derived from ``stock`` on every write that goes through
this module; callers cannot set it directly.
"""

import uuid
from typing import Any, Optional

from libs.common.logging import get_logger
from services.storefront_service.catalog.sizes import parse_sizes, serialize_sizes
from services.storefront_service.models import Product
from services.storefront_service.schemas import ProductCreate
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)

COPY_SKU_SUFFIX = "-COPY"
COPY_NAME_SUFFIX = " (Copia)"


def _canonical_sizes(tokens: Optional[list[str]]) -> list[str]:
    return list(dict.fromkeys(serialize_sizes(parse_sizes(tokens))))


async def list_products(db: AsyncSession) -> list[Product]:
    """All products, newest first."""
    result = await db.execute(select(Product).order_by(Product.created_at.desc()))
    return list(result.scalars().all())


async def get_product(db: AsyncSession, product_id: uuid.UUID) -> Optional[Product]:
    result = await db.execute(select(Product).where(Product.id == product_id))
    return result.scalar_one_or_none()


async def create_product(db: AsyncSession, product_in: ProductCreate) -> Product:
    values = product_in.model_dump()
    values["sizes"] = _canonical_sizes(values["sizes"])
    values["is_in_stock"] = values["stock"] > 0

    product = Product(**values)
    db.add(product)
    await db.commit()
    await db.refresh(product)

    logger.info("Created product %s (%s)", product.id, product.sku)
    return product


async def update_product(
    db: AsyncSession, product: Product, changes: dict[str, Any]
) -> Product:
    changes = dict(changes)
    changes.pop("is_in_stock", None)
    if "sizes" in changes:
        changes["sizes"] = _canonical_sizes(changes["sizes"])

    for field, value in changes.items():
        setattr(product, field, value)
    product.is_in_stock = (product.stock or 0) > 0

    await db.commit()
    await db.refresh(product)
    return product


async def set_visibility(
    db: AsyncSession, product: Product, is_visible: bool
) -> Product:
    return await update_product(db, product, {"is_visible": is_visible})


async def delete_product(db: AsyncSession, product: Product) -> None:
    await db.delete(product)
    await db.commit()
    logger.info("Deleted product %s", product.id)


async def duplicate_product(db: AsyncSession, product: Product) -> Product:
    """Copy a product as a hidden draft so it can be edited before release."""
    copy = Product(
        sku=f"{product.sku}{COPY_SKU_SUFFIX}" if product.sku else None,
        name=f"{product.name}{COPY_NAME_SUFFIX}",
        price=product.price,
        description=product.description,
        category=product.category,
        sizes=list(product.sizes or []),
        colors=list(product.colors or []),
        materials=product.materials,
        images=list(product.images or []),
        is_new=product.is_new,
        is_premium=product.is_premium,
        is_visible=False,
        stock=product.stock,
        is_in_stock=(product.stock or 0) > 0,
    )
    db.add(copy)
    await db.commit()
    await db.refresh(copy)
    return copy
