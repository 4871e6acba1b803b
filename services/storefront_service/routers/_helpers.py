"""Shared dependencies and lookups for storefront routers."""

import uuid

from fastapi import Depends, HTTPException, Query, Request
from services.storefront_service.cart.persistence import KeyValueStore, cart_storage_key
from services.storefront_service.cart.store import CartStore
from services.storefront_service.models import Category, Product
from services.storefront_service.services.catalog_cache import CatalogCache
from services.storefront_service.services.categories import get_category
from services.storefront_service.services.products import get_product
from sqlalchemy.ext.asyncio import AsyncSession


def get_catalog_cache(request: Request) -> CatalogCache:
    return request.app.state.catalog_cache


def get_cart_storage(request: Request) -> KeyValueStore:
    return request.app.state.cart_storage


def get_cart(
    session_id: str = Query(..., min_length=1, max_length=64),
    storage: KeyValueStore = Depends(get_cart_storage),
) -> CartStore:
    """Cart for the anonymous session, rehydrated from storage."""
    return CartStore(storage, cart_storage_key(session_id))


async def get_product_or_404(db: AsyncSession, product_id: uuid.UUID) -> Product:
    product = await get_product(db, product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


async def get_category_or_404(db: AsyncSession, category_id: uuid.UUID) -> Category:
    category = await get_category(db, category_id)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category
