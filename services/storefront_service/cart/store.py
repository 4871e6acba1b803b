"""Persistent shopping cart.

A cart line is identified by (product id, size, color): adding the same triple
again sums quantities instead of creating a second line. Every mutation writes
the whole item list through the injected ``KeyValueStore``.
"""

import json
import uuid
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_serializer, field_validator

from libs.common.logging import get_logger
from services.storefront_service.cart.persistence import KeyValueStore
from services.storefront_service.catalog.sizes import Size

logger = get_logger(__name__)


class CartProduct(BaseModel):
    """Product snapshot taken when the item was added."""

    id: uuid.UUID
    name: str
    price: Decimal = Field(..., ge=0)
    sku: Optional[str] = None
    image_url: Optional[str] = None


class CartItem(BaseModel):
    product: CartProduct
    selected_size: Size
    selected_color: str
    quantity: int = Field(1, ge=1)

    @field_validator("selected_size", mode="before")
    @classmethod
    def parse_size(cls, v):
        if isinstance(v, str):
            return Size.parse(v)
        return v

    @field_serializer("selected_size")
    def serialize_size(self, size: Size) -> str:
        return size.token

    @property
    def key(self) -> tuple[uuid.UUID, Size, str]:
        return (self.product.id, self.selected_size, self.selected_color)

    @property
    def subtotal(self) -> Decimal:
        return self.product.price * self.quantity


class CartStore:
    def __init__(self, storage: KeyValueStore, key: str):
        self.storage = storage
        self.key = key
        self._items: list[CartItem] = self._load()

    def _load(self) -> list[CartItem]:
        raw = self.storage.get(self.key)
        if not raw:
            return []
        try:
            return [CartItem.model_validate(item) for item in json.loads(raw)]
        except (ValueError, TypeError, ValidationError) as e:
            logger.warning(f"Discarding unreadable cart under {self.key}: {e}")
            return []

    def _persist(self) -> None:
        payload = [item.model_dump(mode="json") for item in self._items]
        self.storage.set(self.key, json.dumps(payload))

    def _find(self, key: tuple) -> Optional[int]:
        for index, item in enumerate(self._items):
            if item.key == key:
                return index
        return None

    @property
    def items(self) -> list[CartItem]:
        return list(self._items)

    def add_item(self, item: CartItem) -> None:
        index = self._find(item.key)
        if index is None:
            self._items.append(item)
        else:
            existing = self._items[index]
            self._items[index] = existing.model_copy(
                update={"quantity": existing.quantity + item.quantity}
            )
        self._persist()

    def remove_item(self, product_id: uuid.UUID, size: Size, color: str) -> None:
        self._items = [
            item for item in self._items if item.key != (product_id, size, color)
        ]
        self._persist()

    def update_quantity(
        self, product_id: uuid.UUID, size: Size, color: str, quantity: int
    ) -> None:
        """Set a line's quantity; values below 1 are clamped to 1."""
        index = self._find((product_id, size, color))
        if index is not None:
            self._items[index] = self._items[index].model_copy(
                update={"quantity": max(1, quantity)}
            )
        self._persist()

    def clear_cart(self) -> None:
        self._items = []
        self._persist()

    def quantity_of(self, product_id: uuid.UUID) -> int:
        """Units of one product in the cart, across every size and color."""
        return sum(
            item.quantity for item in self._items if item.product.id == product_id
        )

    def get_total_items(self) -> int:
        return sum(item.quantity for item in self._items)

    def get_total_price(self) -> Decimal:
        return sum((item.subtotal for item in self._items), Decimal("0"))
