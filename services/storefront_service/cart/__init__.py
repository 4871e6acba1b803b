"""Cart state, persistence and checkout message building."""

from services.storefront_service.cart.checkout import (
    CheckoutUnavailableError,
    build_checkout_message,
    build_order_message,
    build_whatsapp_url,
)
from services.storefront_service.cart.persistence import (
    InMemoryKeyValueStore,
    KeyValueStore,
    RedisKeyValueStore,
    cart_storage_key,
)
from services.storefront_service.cart.store import CartItem, CartProduct, CartStore

__all__ = [
    "CartItem",
    "CartProduct",
    "CartStore",
    "CheckoutUnavailableError",
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "RedisKeyValueStore",
    "build_checkout_message",
    "build_order_message",
    "build_whatsapp_url",
    "cart_storage_key",
]
