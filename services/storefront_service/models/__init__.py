"""Storefront models package."""

from services.storefront_service.models.analytics import AnalyticsEvent
from services.storefront_service.models.catalog import Category, Product
from services.storefront_service.models.enums import AnalyticsEventType, LogoKind
from services.storefront_service.models.settings import StoreSettings

__all__ = [
    "AnalyticsEvent",
    "AnalyticsEventType",
    "Category",
    "LogoKind",
    "Product",
    "StoreSettings",
]
