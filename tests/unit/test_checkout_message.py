"""Unit tests for the WhatsApp checkout message."""

import uuid
from decimal import Decimal
from urllib.parse import unquote

import pytest
from services.storefront_service.cart.checkout import (
    CLOSING,
    GREETING,
    SEPARATOR,
    CheckoutUnavailableError,
    build_checkout_message,
    build_order_message,
    build_whatsapp_url,
    normalize_phone,
)
from services.storefront_service.cart.persistence import InMemoryKeyValueStore
from services.storefront_service.cart.store import CartItem, CartProduct, CartStore

pytestmark = pytest.mark.unit


def _cart(*items) -> CartStore:
    cart = CartStore(InMemoryKeyValueStore(), "cart-storage:checkout")
    for item in items:
        cart.add_item(item)
    return cart


def _item(name, price, size, color, quantity, sku=None) -> CartItem:
    return CartItem(
        product=CartProduct(id=uuid.uuid4(), name=name, price=Decimal(price), sku=sku),
        selected_size=size,
        selected_color=color,
        quantity=quantity,
    )


def test_empty_cart_produces_empty_message():
    assert build_checkout_message(_cart()) == ""
    assert build_order_message([], Decimal("0")) == ""


def test_order_message_layout():
    cart = _cart(
        _item("Tacon Clasico", "10.00", "mujer-7", "Negro", 2, sku="TAC-01"),
        _item("Blusa", "15.5", "M", "Blanco", 1),
    )

    message = build_order_message(cart.items, cart.get_total_price())

    assert message.split("\n") == [
        GREETING,
        "",
        "1. Tacon Clasico",
        "   - SKU: TAC-01",
        "   - Size: 7 (Women)",
        "   - Color: Negro",
        "   - Quantity: 2",
        "   - Price: $20.00",
        "",
        "2. Blusa",
        "   - Size: M",
        "   - Color: Blanco",
        "   - Quantity: 1",
        "   - Price: $15.50",
        "",
        SEPARATOR,
        "TOTAL: $35.50 USD",
        "",
        CLOSING,
    ]


def test_checkout_message_is_url_encoded():
    cart = _cart(_item("Zapato Niño & Co", "9.99", "hombre-8", "Café", 1))

    encoded = build_checkout_message(cart)

    assert " " not in encoded
    assert "\n" not in encoded
    assert "&" not in encoded
    assert unquote(encoded) == build_order_message(cart.items, cart.get_total_price())
    assert "8 (Men)" in unquote(encoded)


def test_normalize_phone_keeps_digits_only():
    assert normalize_phone("+58 (412) 555-1234") == "584125551234"
    assert normalize_phone(None) == ""


def test_whatsapp_url():
    cart = _cart(_item("Blusa", "15", "M", "Blanco", 1))

    url = build_whatsapp_url("+58 412-555-1234", cart)

    assert url.startswith("https://wa.me/584125551234?text=")
    assert url.endswith(build_checkout_message(cart))


def test_whatsapp_url_requires_number_and_items():
    with pytest.raises(CheckoutUnavailableError):
        build_whatsapp_url("", _cart(_item("Blusa", "15", "M", "Blanco", 1)))
    with pytest.raises(CheckoutUnavailableError):
        build_whatsapp_url("+58 412", _cart())
