"""
Model factories for creating valid test data.

Every factory produces a valid, insertable SQLAlchemy model instance.
Override any field via kwargs.

Usage:
    product = ProductFactory.create(sku="VES-001", price=Decimal("49.90"))
    db_session.add(product)
    await db_session.commit()
"""

import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _uuid() -> uuid.UUID:
    return uuid.uuid4()


def _now() -> datetime:
    return datetime.now(timezone.utc)


def minutes_ago(minutes: int) -> datetime:
    return _now() - timedelta(minutes=minutes)


def _unique_sku() -> str:
    return f"SKU-{uuid.uuid4().hex[:6].upper()}"


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


class CategoryFactory:
    @staticmethod
    def create(**overrides):
        from services.storefront_service.models import Category

        suffix = uuid.uuid4().hex[:6]
        defaults = {
            "id": _uuid(),
            "name": f"Vestidos {suffix}",
            "slug": f"vestidos-{suffix}",
            "display_order": 1,
            "is_visible": True,
            "created_at": _now(),
        }
        defaults.update(overrides)
        return Category(**defaults)


class ProductFactory:
    @staticmethod
    def create(**overrides):
        from services.storefront_service.models import Product

        defaults = {
            "id": _uuid(),
            "sku": _unique_sku(),
            "name": "Vestido Floral",
            "price": Decimal("49.90"),
            "description": "Vestido de verano",
            "category": "vestidos",
            "sizes": ["S", "M", "L"],
            "colors": ["Rojo", "Azul"],
            "materials": "Algodón",
            "images": ["https://cdn.example.com/vestido.jpg"],
            "stock": 5,
            "is_in_stock": True,
            "is_visible": True,
            "is_new": False,
            "is_premium": False,
            "created_at": _now(),
            "updated_at": _now(),
        }
        defaults.update(overrides)
        if "stock" in overrides and "is_in_stock" not in overrides:
            defaults["is_in_stock"] = defaults["stock"] > 0
        return Product(**defaults)


# ---------------------------------------------------------------------------
# Settings & analytics
# ---------------------------------------------------------------------------


class StoreSettingsFactory:
    @staticmethod
    def create(**overrides):
        from services.storefront_service.models import StoreSettings

        defaults = {
            "id": _uuid(),
            "shop_name": "Boutique Test",
            "exchange_rate": None,
            "contact_whatsapp": "+58 (412) 555-1234",
            "contact_instagram": "@boutique",
            "contact_email": "shop@example.com",
            "footer_credits": "Made by Studio",
            "developer_logo_url": None,
            "theme": "modern",
            "updated_at": _now(),
        }
        defaults.update(overrides)
        return StoreSettings(**defaults)


class AnalyticsEventFactory:
    @staticmethod
    def create(**overrides):
        from services.storefront_service.models import (
            AnalyticsEvent,
            AnalyticsEventType,
        )

        defaults = {
            "id": _uuid(),
            "event_type": AnalyticsEventType.PRODUCT_VIEW,
            "product_id": None,
            "session_id": uuid.uuid4().hex,
            "created_at": _now(),
        }
        defaults.update(overrides)
        return AnalyticsEvent(**defaults)
