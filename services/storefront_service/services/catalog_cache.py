"""Per-process snapshot of the product list.

The public catalog reads through this cache; admin writes patch it
optimistically and resync it from the database afterwards.

Each worker process holds its own snapshot. When a shared store is given,
every invalidation also writes a new catalog version to it, and a snapshot
loaded under an older version is reloaded on the next read, so a write served
by one worker reaches the others without waiting for the TTL.
"""

import time
import uuid
from typing import Any, Optional

from libs.common.config import get_settings
from services.storefront_service.cart.persistence import KeyValueStore
from services.storefront_service.schemas import ProductResponse
from services.storefront_service.services.products import list_products
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool


class CatalogCache:
    def __init__(
        self,
        ttl_seconds: Optional[float] = None,
        shared: Optional[KeyValueStore] = None,
    ):
        settings = get_settings()
        self.ttl_seconds = (
            settings.CATALOG_CACHE_TTL_SECONDS if ttl_seconds is None else ttl_seconds
        )
        self.shared = shared
        self.version_key = settings.CATALOG_VERSION_KEY
        self._products: Optional[list[ProductResponse]] = None
        self._loaded_at = 0.0
        self._version: Optional[str] = None

    @property
    def is_fresh(self) -> bool:
        return (
            self._products is not None
            and time.monotonic() - self._loaded_at < self.ttl_seconds
        )

    async def shared_version(self) -> Optional[str]:
        if self.shared is None:
            return None
        return await run_in_threadpool(self.shared.get, self.version_key)

    async def get(self, db: AsyncSession) -> list[ProductResponse]:
        # Read before loading so a concurrent bump forces another reload
        version = await self.shared_version()
        if not self.is_fresh or version != self._version:
            await self.refresh(db, version)
        return list(self._products or [])

    async def refresh(
        self, db: AsyncSession, version: Optional[str] = None
    ) -> list[ProductResponse]:
        products = await list_products(db)
        self._products = [ProductResponse.model_validate(p) for p in products]
        self._loaded_at = time.monotonic()
        self._version = version
        return list(self._products)

    def snapshot(self) -> Optional[list[ProductResponse]]:
        return None if self._products is None else list(self._products)

    def restore(self, snapshot: Optional[list[ProductResponse]]) -> None:
        self._products = None if snapshot is None else list(snapshot)

    def patch(self, product_id: uuid.UUID, changes: dict[str, Any]) -> None:
        """Apply ``changes`` to the cached product, if it is cached."""
        if self._products is None:
            return
        patched = []
        for product in self._products:
            if product.id == product_id:
                data = {**product.model_dump(), **changes}
                if "stock" in changes:
                    data["is_in_stock"] = (data["stock"] or 0) > 0
                product = ProductResponse.model_validate(data)
            patched.append(product)
        self._products = patched

    async def invalidate(self) -> None:
        """Drop this snapshot and, when shared, every other worker's too."""
        self._products = None
        self._loaded_at = 0.0
        if self.shared is not None:
            await run_in_threadpool(
                self.shared.set, self.version_key, uuid.uuid4().hex
            )
