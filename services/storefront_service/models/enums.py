"""Enum definitions for storefront models."""

import enum


def enum_values(enum_cls):
    """Return persistent DB values for SAEnum mappings."""
    return [member.value for member in enum_cls]


class AnalyticsEventType(str, enum.Enum):
    PRODUCT_VIEW = "product_view"
    ADD_TO_CART_CLICK = "add_to_cart_click"


class LogoKind(str, enum.Enum):
    SHOP = "shop"
    DEVELOPER = "developer"
