"""Storefront service routers package."""

from services.storefront_service.routers.admin_catalog import router as admin_catalog_router
from services.storefront_service.routers.admin_settings import (
    router as admin_settings_router,
)
from services.storefront_service.routers.admin_stats import router as admin_stats_router
from services.storefront_service.routers.cart import router as cart_router
from services.storefront_service.routers.catalog import router as catalog_router

__all__ = [
    "admin_catalog_router",
    "admin_settings_router",
    "admin_stats_router",
    "cart_router",
    "catalog_router",
]
