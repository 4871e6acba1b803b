"""Category accessors."""

import uuid
from typing import Any, Optional

from services.storefront_service.catalog.slugs import slugify
from services.storefront_service.models import Category
from services.storefront_service.schemas import CategoryCreate
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession


async def list_categories(
    db: AsyncSession, include_hidden: bool = False
) -> list[Category]:
    query = select(Category).order_by(Category.display_order, Category.name)
    if not include_hidden:
        query = query.where(Category.is_visible.is_(True))
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_category(db: AsyncSession, category_id: uuid.UUID) -> Optional[Category]:
    result = await db.execute(select(Category).where(Category.id == category_id))
    return result.scalar_one_or_none()


async def get_category_by_slug(db: AsyncSession, slug: str) -> Optional[Category]:
    result = await db.execute(select(Category).where(Category.slug == slug))
    return result.scalar_one_or_none()


async def create_category(db: AsyncSession, category_in: CategoryCreate) -> Category:
    """Insert a category; new categories go to the end of the list by default."""
    slug = category_in.slug or slugify(category_in.name)
    if not slug:
        raise ValueError("Category name produces an empty slug")

    display_order = category_in.display_order
    if display_order is None:
        count = await db.execute(select(func.count()).select_from(Category))
        display_order = (count.scalar() or 0) + 1

    category = Category(
        name=category_in.name,
        slug=slug,
        display_order=display_order,
        is_visible=category_in.is_visible,
    )
    db.add(category)
    await db.commit()
    await db.refresh(category)
    return category


async def update_category(
    db: AsyncSession, category: Category, changes: dict[str, Any]
) -> Category:
    for field, value in changes.items():
        setattr(category, field, value)
    await db.commit()
    await db.refresh(category)
    return category


async def delete_category(db: AsyncSession, category: Category) -> None:
    await db.delete(category)
    await db.commit()


async def reorder_categories(
    db: AsyncSession, ordered_ids: list[uuid.UUID]
) -> Optional[list[Category]]:
    """Assign display_order 1..n following ``ordered_ids``.

    Returns None (and changes nothing) if any id is unknown.
    """
    result = await db.execute(select(Category).where(Category.id.in_(ordered_ids)))
    by_id = {c.id: c for c in result.scalars().all()}
    if len(by_id) != len(set(ordered_ids)):
        return None

    for position, category_id in enumerate(dict.fromkeys(ordered_ids), start=1):
        by_id[category_id].display_order = position

    await db.commit()
    return await list_categories(db, include_hidden=True)
