"""Admin storefront router: products, categories, size presets and images."""

import uuid
from typing import Optional

from fastapi import (
    APIRouter,
    Depends,
    File,
    Form,
    HTTPException,
    Query,
    Response,
    UploadFile,
    status,
)
from libs.auth.dependencies import require_admin
from libs.auth.models import AuthUser
from libs.common.optimistic import run_optimistic
from libs.db.session import get_async_db
from services.storefront_service.catalog.pipeline import search_products
from services.storefront_service.catalog.slugs import slugify
from services.storefront_service.catalog.sizes import size_presets
from services.storefront_service.routers._helpers import (
    get_catalog_cache,
    get_category_or_404,
    get_product_or_404,
)
from services.storefront_service.schemas import (
    CategoryCreate,
    CategoryReorder,
    CategoryResponse,
    CategoryUpdate,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
    SizePresetsResponse,
    UploadResponse,
    VisibilityUpdate,
)
from services.storefront_service.services import categories as category_service
from services.storefront_service.services import products as product_service
from services.storefront_service.services.catalog_cache import CatalogCache
from services.storefront_service.services.uploads import (
    ImageStorage,
    UploadError,
    get_image_storage,
)
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

router = APIRouter(tags=["admin-storefront"])


# ============================================================================
# PRODUCTS
# ============================================================================


@router.get("/products", response_model=list[ProductResponse])
async def list_all_products(
    search: str = "",
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """List all products, hidden ones included, newest first.

    ``search`` narrows the list by name or SKU.
    """
    return search_products(await product_service.list_products(db), search)


@router.get("/products/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: uuid.UUID,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    return await get_product_or_404(db, product_id)


@router.post(
    "/products", response_model=ProductResponse, status_code=status.HTTP_201_CREATED
)
async def create_product(
    product_in: ProductCreate,
    current_user: AuthUser = Depends(require_admin),
    cache: CatalogCache = Depends(get_catalog_cache),
    db: AsyncSession = Depends(get_async_db),
):
    product = await product_service.create_product(db, product_in)
    await cache.invalidate()
    return product


@router.patch("/products/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: uuid.UUID,
    product_in: ProductUpdate,
    current_user: AuthUser = Depends(require_admin),
    cache: CatalogCache = Depends(get_catalog_cache),
    db: AsyncSession = Depends(get_async_db),
):
    """Update a product; the public catalog sees the change right away."""
    product = await get_product_or_404(db, product_id)
    changes = product_in.model_dump(exclude_unset=True)

    return await run_optimistic(
        snapshot=cache.snapshot,
        apply=lambda: cache.patch(product_id, changes),
        commit=lambda: product_service.update_product(db, product, changes),
        restore=cache.restore,
        resync=cache.invalidate,
    )


@router.patch("/products/{product_id}/visibility", response_model=ProductResponse)
async def set_product_visibility(
    product_id: uuid.UUID,
    visibility_in: VisibilityUpdate,
    current_user: AuthUser = Depends(require_admin),
    cache: CatalogCache = Depends(get_catalog_cache),
    db: AsyncSession = Depends(get_async_db),
):
    product = await get_product_or_404(db, product_id)
    is_visible = visibility_in.is_visible

    return await run_optimistic(
        snapshot=cache.snapshot,
        apply=lambda: cache.patch(product_id, {"is_visible": is_visible}),
        commit=lambda: product_service.set_visibility(db, product, is_visible),
        restore=cache.restore,
        resync=cache.invalidate,
    )


@router.post(
    "/products/{product_id}/duplicate",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
)
async def duplicate_product(
    product_id: uuid.UUID,
    current_user: AuthUser = Depends(require_admin),
    cache: CatalogCache = Depends(get_catalog_cache),
    db: AsyncSession = Depends(get_async_db),
):
    """Copy a product as a hidden draft."""
    product = await get_product_or_404(db, product_id)
    copy = await product_service.duplicate_product(db, product)
    await cache.invalidate()
    return copy


@router.delete("/products/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: uuid.UUID,
    current_user: AuthUser = Depends(require_admin),
    cache: CatalogCache = Depends(get_catalog_cache),
    db: AsyncSession = Depends(get_async_db),
):
    product = await get_product_or_404(db, product_id)
    await product_service.delete_product(db, product)
    await cache.invalidate()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/products/images", response_model=UploadResponse)
async def upload_product_image(
    sku: str = Form(..., min_length=1, max_length=50),
    file: UploadFile = File(...),
    current_user: AuthUser = Depends(require_admin),
    storage: ImageStorage = Depends(get_image_storage),
):
    """Upload a product image named after the product SKU."""
    if not (file.content_type or "").startswith("image/"):
        raise HTTPException(status_code=400, detail="File must be an image")

    data = await file.read()
    try:
        url, filename = await run_in_threadpool(
            storage.upload_product_image, sku, data, file.filename, file.content_type
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except UploadError as e:
        raise HTTPException(status_code=502, detail=f"Image upload failed: {e}")

    return UploadResponse(url=url, filename=filename)


@router.get("/size-presets", response_model=SizePresetsResponse)
async def get_size_presets(
    category: str = Query(..., min_length=1),
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Suggested sizes for a category slug (footwear, pants or clothing)."""
    existing = await category_service.get_category_by_slug(db, category)
    name = existing.name if existing else ""
    return SizePresetsResponse(category=category, groups=size_presets(category, name))


# ============================================================================
# CATEGORIES
# ============================================================================


@router.get("/categories", response_model=list[CategoryResponse])
async def list_all_categories(
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """List all categories (including hidden)."""
    return await category_service.list_categories(db, include_hidden=True)


async def _ensure_slug_available(
    db: AsyncSession, slug: Optional[str], exclude_id: Optional[uuid.UUID] = None
) -> None:
    if not slug:
        return
    existing = await category_service.get_category_by_slug(db, slug)
    if existing and existing.id != exclude_id:
        raise HTTPException(
            status_code=400, detail="Category with this slug already exists"
        )


@router.post(
    "/categories", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED
)
async def create_category(
    category_in: CategoryCreate,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Create a category; the slug is derived from the name when omitted."""
    await _ensure_slug_available(db, category_in.slug or slugify(category_in.name))
    try:
        return await category_service.create_category(db, category_in)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/categories/order", response_model=list[CategoryResponse])
async def reorder_categories(
    reorder_in: CategoryReorder,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Set display order from the given id sequence."""
    categories = await category_service.reorder_categories(db, reorder_in.ids)
    if categories is None:
        raise HTTPException(status_code=404, detail="Category not found")
    return categories


@router.patch("/categories/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: uuid.UUID,
    category_in: CategoryUpdate,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    category = await get_category_or_404(db, category_id)
    changes = category_in.model_dump(exclude_unset=True)
    await _ensure_slug_available(db, changes.get("slug"), exclude_id=category_id)
    return await category_service.update_category(db, category, changes)


@router.delete("/categories/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: uuid.UUID,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    category = await get_category_or_404(db, category_id)
    await category_service.delete_category(db, category)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
