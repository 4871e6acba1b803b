"""Product filter/sort pipeline for the public catalog.

``filter_products`` is a pure function over an already-fetched product list.
Every stage is a conjunctive filter returning a new list; the caller's list is
never modified. Products are expected to arrive newest first, which is the
order the ``newest`` sort keeps.
"""

from typing import Sequence, TypeVar

from services.storefront_service.catalog.filters import (
    ALL_CATEGORIES,
    FilterSelection,
    SortMode,
)

P = TypeVar("P")


def _visible(products: Sequence[P]) -> list[P]:
    return [p for p in products if p.is_visible]


def search_products(products: Sequence[P], search: str) -> list[P]:
    """Products whose name or SKU contains ``search``, case-insensitively."""
    if not (search or "").strip():
        return list(products)
    query = search.lower()
    return [
        p
        for p in products
        if query in p.name.lower() or (p.sku and query in p.sku.lower())
    ]


def _by_category(products: list[P], category: str) -> list[P]:
    if category == ALL_CATEGORIES:
        return products
    return [p for p in products if p.category == category]


def _by_sizes(products: list[P], selection: FilterSelection) -> list[P]:
    if not selection.sizes:
        return products
    return [p for p in products if selection.sizes.intersection(p.sizes)]


def _by_colors(products: list[P], selection: FilterSelection) -> list[P]:
    if not selection.colors:
        return products
    # Substring match so "Azul Marino" is kept for "Azul"
    wanted = [c.lower() for c in selection.colors]
    return [
        p
        for p in products
        if any(w in color.lower() for color in p.colors for w in wanted)
    ]


def _by_price(products: list[P], selection: FilterSelection) -> list[P]:
    bucket = selection.price_bucket
    if bucket is None:
        return products
    return [p for p in products if bucket.contains(p.price)]


def sort_products(products: list[P], sort_by: SortMode) -> list[P]:
    if sort_by is SortMode.PRICE_ASC:
        return sorted(products, key=lambda p: p.price)
    if sort_by is SortMode.PRICE_DESC:
        # reverse=True keeps equal prices in their original relative order
        return sorted(products, key=lambda p: p.price, reverse=True)
    return list(products)


def filter_products(
    products: Sequence[P], search: str, selection: FilterSelection
) -> list[P]:
    """Apply visibility, search, facet filters and sort to ``products``."""
    result = _visible(products)
    result = search_products(result, search)
    result = _by_category(result, selection.category)
    result = _by_sizes(result, selection)
    result = _by_colors(result, selection)
    result = _by_price(result, selection)
    return sort_products(result, selection.sort_by)
