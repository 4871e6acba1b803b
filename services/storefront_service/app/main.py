"""FastAPI application for the Storefront Service."""

from typing import Optional

from fastapi import FastAPI
from libs.common.middleware import add_observability_middleware
from services.storefront_service.cart.persistence import (
    KeyValueStore,
    RedisKeyValueStore,
)
from services.storefront_service.routers import (
    admin_catalog_router,
    admin_settings_router,
    admin_stats_router,
    cart_router,
    catalog_router,
)
from services.storefront_service.services.catalog_cache import CatalogCache


def create_app(cart_storage: Optional[KeyValueStore] = None) -> FastAPI:
    """Create and configure the Storefront Service FastAPI app."""
    app = FastAPI(
        title="Storefront Service",
        version="0.1.0",
        description="Catalog, cart and WhatsApp checkout for a small clothing store.",
    )
    add_observability_middleware(app)

    app.state.cart_storage = cart_storage or RedisKeyValueStore.from_url()
    app.state.catalog_cache = CatalogCache(shared=app.state.cart_storage)

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok", "service": "storefront"}

    # Public storefront routes (catalog, cart, checkout)
    app.include_router(catalog_router, prefix="/store")
    app.include_router(cart_router, prefix="/store")

    # Admin routes (catalog management, settings, analytics)
    app.include_router(admin_catalog_router, prefix="/admin/store")
    app.include_router(admin_settings_router, prefix="/admin/store")
    app.include_router(admin_stats_router, prefix="/admin/store")

    return app


app = create_app()
