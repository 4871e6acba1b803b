"""Catalog filtering, facets and size taxonomy."""

from services.storefront_service.catalog.facets import CatalogFacets, derive_facets
from services.storefront_service.catalog.filters import (
    ALL_CATEGORIES,
    PRICE_BUCKETS,
    CatalogStore,
    FilterSelection,
    PriceBucket,
    SortMode,
)
from services.storefront_service.catalog.pipeline import filter_products, search_products
from services.storefront_service.catalog.sizes import Size, SizeGroup
from services.storefront_service.catalog.slugs import slugify
from services.storefront_service.catalog.themes import StoreTheme, resolve_theme

__all__ = [
    "ALL_CATEGORIES",
    "CatalogFacets",
    "CatalogStore",
    "FilterSelection",
    "PRICE_BUCKETS",
    "PriceBucket",
    "Size",
    "SizeGroup",
    "SortMode",
    "StoreTheme",
    "derive_facets",
    "filter_products",
    "resolve_theme",
    "search_products",
    "slugify",
]
