"""Public storefront router: products, facets, categories, settings, analytics."""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from libs.common.currency import to_local_price
from libs.db.session import get_async_db
from services.storefront_service.catalog import (
    ALL_CATEGORIES,
    CatalogStore,
    SortMode,
    derive_facets,
    filter_products,
)
from services.storefront_service.routers._helpers import (
    get_catalog_cache,
    get_product_or_404,
)
from services.storefront_service.schemas import (
    AnalyticsEventCreate,
    CategoryResponse,
    FacetsResponse,
    PriceRangeResponse,
    ProductDetail,
    ProductListResponse,
    ProductResponse,
    SessionResponse,
    SizeFacetsResponse,
    StoreSettingsResponse,
)
from services.storefront_service.services.analytics import track_event
from services.storefront_service.services.catalog_cache import CatalogCache
from services.storefront_service.services.categories import list_categories
from services.storefront_service.services.store_settings import get_store_settings
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(tags=["storefront"])


# ============================================================================
# PRODUCTS
# ============================================================================


@router.get("/products", response_model=ProductListResponse)
async def list_products(
    search: str = "",
    category: str = ALL_CATEGORIES,
    sizes: list[str] = Query([]),
    colors: list[str] = Query([]),
    price_range: Optional[str] = None,
    sort: SortMode = SortMode.NEWEST,
    cache: CatalogCache = Depends(get_catalog_cache),
    db: AsyncSession = Depends(get_async_db),
):
    """Visible products matching the search and filter selection."""
    try:
        store = CatalogStore.from_query(
            category=category,
            sizes=sizes,
            colors=colors,
            price_range=price_range,
            sort_by=sort,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    products = await cache.get(db)
    items = filter_products(products, search, store.selection)
    return ProductListResponse(
        items=items,
        total=len(items),
        active_filter_count=store.selection.active_filter_count,
    )


@router.get("/products/{product_id}", response_model=ProductDetail)
async def get_product_detail(
    product_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_db),
):
    """Product detail, with the local-currency price when a rate is set."""
    product = await get_product_or_404(db, product_id)
    if not product.is_visible:
        raise HTTPException(status_code=404, detail="Product not found")

    settings = await get_store_settings(db)
    rate = settings.exchange_rate if settings else None
    local_price = to_local_price(product.price, rate)

    response = ProductResponse.model_validate(product)
    return ProductDetail(
        **response.model_dump(),
        size_labels=[size.label for size in response.sizes],
        price_local=local_price,
        exchange_rate=rate if local_price is not None else None,
    )


@router.get("/facets", response_model=FacetsResponse)
async def get_facets(
    cache: CatalogCache = Depends(get_catalog_cache),
    db: AsyncSession = Depends(get_async_db),
):
    """Filter options derived from the visible catalog."""
    facets = derive_facets(await cache.get(db))
    return FacetsResponse(
        sizes=SizeFacetsResponse(
            apparel=facets.sizes.apparel,
            women=facets.sizes.women,
            men=facets.sizes.men,
        ),
        colors=facets.colors,
        price_ranges=[PriceRangeResponse.model_validate(b) for b in facets.price_ranges],
    )


# ============================================================================
# CATEGORIES & SETTINGS
# ============================================================================


@router.get("/categories", response_model=list[CategoryResponse])
async def get_categories(db: AsyncSession = Depends(get_async_db)):
    return await list_categories(db)


@router.get("/settings", response_model=StoreSettingsResponse)
async def get_public_settings(db: AsyncSession = Depends(get_async_db)):
    """Public store settings; defaults until the admin saves them."""
    settings = await get_store_settings(db)
    if settings is None:
        return StoreSettingsResponse()
    return StoreSettingsResponse.model_validate(settings)


# ============================================================================
# SESSION & ANALYTICS
# ============================================================================


@router.post(
    "/session", response_model=SessionResponse, status_code=status.HTTP_201_CREATED
)
async def create_session():
    """Issue an anonymous session id for cart and analytics."""
    return SessionResponse(session_id=uuid.uuid4().hex)


@router.post("/events", status_code=status.HTTP_202_ACCEPTED)
async def record_event(
    event_in: AnalyticsEventCreate,
    db: AsyncSession = Depends(get_async_db),
):
    # Accepted even when the write fails
    await track_event(
        db,
        event_in.event_type,
        session_id=event_in.session_id,
        product_id=event_in.product_id,
    )
    return {"status": "accepted"}
