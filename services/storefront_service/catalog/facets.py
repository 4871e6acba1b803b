"""Facet values (sizes, colors, price buckets) offered by the catalog filters."""

import unicodedata
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Iterable

from services.storefront_service.catalog.filters import PRICE_BUCKETS, PriceBucket
from services.storefront_service.catalog.sizes import Size, SizeGroup


@dataclass
class SizeFacets:
    apparel: list[str] = field(default_factory=list)
    women: list[str] = field(default_factory=list)
    men: list[str] = field(default_factory=list)


@dataclass
class CatalogFacets:
    sizes: SizeFacets
    colors: list[str]
    price_ranges: list[PriceBucket]


def _numeric_first(value: str):
    try:
        number = Decimal(value)
    except InvalidOperation:
        return (1, Decimal(0), value)
    if not number.is_finite():
        return (1, Decimal(0), value)
    return (0, number, value)


def _collation_key(text: str) -> tuple[str, str]:
    stripped = "".join(
        c for c in unicodedata.normalize("NFD", text) if not unicodedata.combining(c)
    )
    return (stripped.casefold(), text)


def derive_size_facets(sizes: Iterable[Size]) -> SizeFacets:
    unique = set(sizes)
    return SizeFacets(
        apparel=sorted(s.value for s in unique if s.group is SizeGroup.APPAREL),
        women=sorted(
            (s.value for s in unique if s.group is SizeGroup.WOMEN), key=_numeric_first
        ),
        men=sorted(
            (s.value for s in unique if s.group is SizeGroup.MEN), key=_numeric_first
        ),
    )


def derive_color_facets(colors: Iterable[str]) -> list[str]:
    """Unique colors, one casing per color.

    The most frequent casing is shown; ties go to the lowest code point order
    (so "Rojo" beats "rojo"), independent of product order.
    """
    variants: dict[str, Counter] = defaultdict(Counter)
    for color in colors:
        if color:
            variants[color.casefold()][color] += 1
    shown = [
        min(counts, key=lambda v: (-counts[v], v)) for counts in variants.values()
    ]
    return sorted(shown, key=_collation_key)


def derive_facets(products: Iterable) -> CatalogFacets:
    """Compute facets from visible products only."""
    visible = [p for p in products if p.is_visible]
    return CatalogFacets(
        sizes=derive_size_facets(s for p in visible for s in p.sizes),
        colors=derive_color_facets(c for p in visible for c in p.colors),
        price_ranges=list(PRICE_BUCKETS.values()),
    )
