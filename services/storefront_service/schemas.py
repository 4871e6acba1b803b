"""Pydantic schemas for the storefront service."""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    field_serializer,
    field_validator,
)
from services.storefront_service.cart.store import CartItem
from services.storefront_service.catalog.sizes import Size
from services.storefront_service.catalog.themes import StoreTheme, resolve_theme
from services.storefront_service.models import AnalyticsEventType

# ============================================================================
# CATEGORY SCHEMAS
# ============================================================================


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    slug: Optional[str] = Field(None, max_length=100)  # derived from name if omitted
    display_order: Optional[int] = None
    is_visible: bool = True

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    slug: Optional[str] = Field(None, max_length=100)
    display_order: Optional[int] = None
    is_visible: Optional[bool] = None


class CategoryReorder(BaseModel):
    """Category ids in their new display order."""

    ids: list[uuid.UUID] = Field(..., min_length=1)


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    slug: str
    display_order: int
    is_visible: bool
    created_at: datetime


# ============================================================================
# PRODUCT SCHEMAS
# ============================================================================


def _dedupe_colors(colors: Optional[list[str]]) -> Optional[list[str]]:
    if colors is None:
        return None
    return list(dict.fromkeys(c.strip() for c in colors if c and c.strip()))


class ProductBase(BaseModel):
    sku: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=200)
    price: Decimal = Field(..., ge=Decimal("0.01"))
    description: Optional[str] = Field(None, max_length=2000)
    category: str = Field(..., min_length=1)
    sizes: list[str] = []
    colors: list[str] = []
    materials: Optional[str] = Field(None, max_length=500)
    images: list[str] = []
    is_new: bool = False
    is_premium: bool = False
    stock: int = Field(0, ge=0)

    @field_validator("colors")
    @classmethod
    def dedupe_colors(cls, v: list[str]) -> list[str]:
        return _dedupe_colors(v)


class ProductCreate(ProductBase):
    is_visible: bool = True


class ProductUpdate(BaseModel):
    sku: Optional[str] = Field(None, min_length=1, max_length=50)
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    price: Optional[Decimal] = Field(None, ge=Decimal("0.01"))
    description: Optional[str] = Field(None, max_length=2000)
    category: Optional[str] = Field(None, min_length=1)
    sizes: Optional[list[str]] = None
    colors: Optional[list[str]] = None
    materials: Optional[str] = Field(None, max_length=500)
    images: Optional[list[str]] = None
    is_new: Optional[bool] = None
    is_premium: Optional[bool] = None
    is_visible: Optional[bool] = None
    stock: Optional[int] = Field(None, ge=0)

    @field_validator(
        "name",
        "price",
        "category",
        "sizes",
        "colors",
        "images",
        "stock",
        "is_new",
        "is_premium",
        "is_visible",
    )
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("May be omitted but not null")
        return v

    @field_validator("colors")
    @classmethod
    def dedupe_colors(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        return _dedupe_colors(v)


class VisibilityUpdate(BaseModel):
    is_visible: bool


class ProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    sku: Optional[str] = None
    name: str
    price: Decimal
    description: Optional[str] = None
    category: str
    sizes: list[Size] = []
    colors: list[str] = []
    materials: Optional[str] = None
    images: list[str] = []
    stock: int = 0
    is_in_stock: bool = False
    is_visible: bool = True
    is_new: bool = False
    is_premium: bool = False
    created_at: datetime
    updated_at: datetime

    @field_validator("sizes", mode="before")
    @classmethod
    def parse_size_tokens(cls, v):
        return [s if isinstance(s, Size) else Size.parse(s) for s in (v or [])]

    @field_validator("colors", "images", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return v or []

    @field_serializer("sizes")
    def serialize_sizes(self, sizes: list[Size]) -> list[str]:
        return [s.token for s in sizes]


class ProductDetail(ProductResponse):
    """Product with the secondary-currency price when a rate is configured."""

    size_labels: list[str] = []
    price_local: Optional[Decimal] = None
    exchange_rate: Optional[Decimal] = None


class ProductListResponse(BaseModel):
    items: list[ProductResponse]
    total: int
    active_filter_count: int = 0


# ============================================================================
# FACET SCHEMAS
# ============================================================================


class SizeFacetsResponse(BaseModel):
    apparel: list[str] = []
    women: list[str] = []
    men: list[str] = []


class PriceRangeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    label: str
    min: Decimal
    max: Optional[Decimal] = None


class FacetsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    sizes: SizeFacetsResponse
    colors: list[str]
    price_ranges: list[PriceRangeResponse]


class SizePresetsResponse(BaseModel):
    category: str
    groups: dict[str, list[str]]


# ============================================================================
# STORE SETTINGS SCHEMAS
# ============================================================================


class StoreSettingsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    shop_name: str = ""
    shop_logo_url: Optional[str] = None
    exchange_rate: Optional[Decimal] = None
    contact_whatsapp: Optional[str] = None
    contact_instagram: Optional[str] = None
    contact_email: Optional[str] = None
    footer_credits: Optional[str] = None
    developer_logo_url: Optional[str] = None
    theme: StoreTheme = StoreTheme.MODERN

    @field_validator("theme", mode="before")
    @classmethod
    def resolve_stored_theme(cls, v):
        return resolve_theme(v)


class AdminStoreSettingsResponse(StoreSettingsResponse):
    """Settings as seen from the admin panel, which always renders ``modern``."""

    presentation_theme: StoreTheme = StoreTheme.MODERN


class StoreSettingsUpdate(BaseModel):
    shop_name: Optional[str] = Field(None, max_length=120)
    shop_logo_url: Optional[str] = None
    exchange_rate: Optional[Decimal] = Field(None, gt=0)
    contact_whatsapp: Optional[str] = Field(None, max_length=40)
    contact_instagram: Optional[str] = Field(None, max_length=100)
    contact_email: Optional[EmailStr] = None
    footer_credits: Optional[str] = None
    developer_logo_url: Optional[str] = None
    theme: Optional[StoreTheme] = None


# ============================================================================
# ANALYTICS SCHEMAS
# ============================================================================


class SessionResponse(BaseModel):
    session_id: str


class AnalyticsEventCreate(BaseModel):
    event_type: AnalyticsEventType
    product_id: Optional[uuid.UUID] = None
    session_id: str = Field(..., min_length=1, max_length=64)


class TopViewedProduct(BaseModel):
    product_id: uuid.UUID
    name: str
    sku: Optional[str] = None
    view_count: int


class AnalyticsStatsResponse(BaseModel):
    total_product_views: int
    total_add_to_cart_clicks: int
    top_viewed_products: list[TopViewedProduct] = []


# ============================================================================
# CART SCHEMAS
# ============================================================================


class CartItemCreate(BaseModel):
    product_id: uuid.UUID
    size: str = Field(..., min_length=1)
    color: str = Field(..., min_length=1)
    quantity: int = Field(1, ge=1)


class CartItemUpdate(BaseModel):
    product_id: uuid.UUID
    size: str = Field(..., min_length=1)
    color: str = Field(..., min_length=1)
    quantity: int  # clamped to 1 by the cart


class CartResponse(BaseModel):
    items: list[CartItem]
    total_items: int
    total_price: Decimal


class CheckoutResponse(BaseModel):
    url: str
    message: str


# ============================================================================
# UPLOAD SCHEMAS
# ============================================================================


class UploadResponse(BaseModel):
    url: str
    filename: str


