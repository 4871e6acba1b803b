"""Secondary-currency display helpers for the storefront.

Catalog prices are stored in the shop's base currency (USD). Stores may
configure an exchange rate to also show a local-currency price; the rate is a
display aid only and never feeds totals or checkout.

Conversion
----------
USD × rate → local amount (2 decimals, half-up)
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

CENTS = Decimal("0.01")


def has_exchange_rate(rate: Optional[Decimal | float | int]) -> bool:
    """True when a rate is configured and strictly positive."""
    return rate is not None and Decimal(str(rate)) > 0


def to_local_price(
    price: Decimal | float | int, rate: Optional[Decimal | float | int]
) -> Optional[Decimal]:
    """Convert a base-currency price using ``rate``, or None when display is off."""
    if not has_exchange_rate(rate):
        return None
    amount = Decimal(str(price)) * Decimal(str(rate))
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def format_amount(amount: Decimal | float | int) -> str:
    """Render an amount with exactly two decimals (no thousands separator)."""
    return f"{Decimal(str(amount)).quantize(CENTS, rounding=ROUND_HALF_UP)}"
