"""Order message for WhatsApp checkout.

The message is plain text the shop receives in a chat; it is URL-encoded so it
can travel in the ``text`` query parameter of a ``wa.me`` link.
"""

import re
from decimal import Decimal
from typing import Optional, Sequence
from urllib.parse import quote

from libs.common.config import get_settings
from libs.common.currency import format_amount
from services.storefront_service.cart.store import CartItem, CartStore

GREETING = "Hello! I'd like to place the following order:"
SEPARATOR = "━━━━━━━━━━━━━━━━━━"
CLOSING = "Please confirm availability and payment method. Thank you!"
CURRENCY_CODE = "USD"

# Characters encodeURIComponent leaves as-is
_URI_COMPONENT_SAFE = "-_.!~*'()"
_NON_DIGITS = re.compile(r"\D")


class CheckoutUnavailableError(Exception):
    """Checkout cannot be started (no items, or no WhatsApp number)."""


def build_order_message(items: Sequence[CartItem], total: Decimal) -> str:
    if not items:
        return ""

    lines = [GREETING, ""]
    for index, item in enumerate(items, start=1):
        lines.append(f"{index}. {item.product.name}")
        if item.product.sku:
            lines.append(f"   - SKU: {item.product.sku}")
        lines.append(f"   - Size: {item.selected_size.label}")
        lines.append(f"   - Color: {item.selected_color}")
        lines.append(f"   - Quantity: {item.quantity}")
        lines.append(f"   - Price: ${format_amount(item.subtotal)}")
        lines.append("")

    lines.append(SEPARATOR)
    lines.append(f"TOTAL: ${format_amount(total)} {CURRENCY_CODE}")
    lines.append("")
    lines.append(CLOSING)
    return "\n".join(lines)


def build_checkout_message(cart: CartStore) -> str:
    """URL-encoded order message; empty string for an empty cart."""
    message = build_order_message(cart.items, cart.get_total_price())
    if not message:
        return ""
    return quote(message, safe=_URI_COMPONENT_SAFE)


def normalize_phone(phone: Optional[str]) -> str:
    return _NON_DIGITS.sub("", phone or "")


def build_whatsapp_url(phone: Optional[str], cart: CartStore) -> str:
    digits = normalize_phone(phone)
    if not digits:
        raise CheckoutUnavailableError("No WhatsApp number is configured for this store")
    message = build_checkout_message(cart)
    if not message:
        raise CheckoutUnavailableError("Cart is empty")
    return f"{get_settings().WHATSAPP_BASE_URL}/{digits}?text={message}"
