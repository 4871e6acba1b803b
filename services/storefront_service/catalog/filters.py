"""Catalog filter/sort selection and the store that mutates it."""

import enum
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Iterable, Optional

from services.storefront_service.catalog.sizes import Size

ALL_CATEGORIES = "all"


class SortMode(str, enum.Enum):
    NEWEST = "newest"
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"


@dataclass(frozen=True)
class PriceBucket:
    id: str
    label: str
    min: Decimal
    max: Optional[Decimal]  # None = unbounded

    def contains(self, price: Decimal) -> bool:
        if price < self.min:
            return False
        return self.max is None or price <= self.max


PRICE_BUCKETS: dict[str, PriceBucket] = {
    b.id: b
    for b in (
        PriceBucket("under-50", "Up to $50", Decimal("0"), Decimal("50")),
        PriceBucket("50-100", "$50 - $100", Decimal("50"), Decimal("100")),
        PriceBucket("100-200", "$100 - $200", Decimal("100"), Decimal("200")),
        PriceBucket("over-200", "Over $200", Decimal("200"), None),
    )
}


def get_price_bucket(bucket_id: str) -> PriceBucket:
    try:
        return PRICE_BUCKETS[bucket_id]
    except KeyError:
        raise ValueError(f"Unknown price range: {bucket_id}") from None


@dataclass(frozen=True)
class FilterSelection:
    category: str = ALL_CATEGORIES
    sizes: frozenset[Size] = field(default_factory=frozenset)
    colors: frozenset[str] = field(default_factory=frozenset)
    price_range: Optional[str] = None
    sort_by: SortMode = SortMode.NEWEST

    @property
    def price_bucket(self) -> Optional[PriceBucket]:
        if self.price_range is None:
            return None
        return PRICE_BUCKETS[self.price_range]

    @property
    def has_active_filters(self) -> bool:
        return bool(self.sizes or self.colors or self.price_range)

    @property
    def active_filter_count(self) -> int:
        return len(self.sizes) + len(self.colors) + (1 if self.price_range else 0)


class CatalogStore:
    """Session-scoped filter state for one catalog view.

    Holds an immutable ``FilterSelection`` and swaps it on every mutation.
    Nothing is persisted; a new store starts from the defaults.
    """

    def __init__(self, selection: Optional[FilterSelection] = None):
        self.selection = selection or FilterSelection()

    @classmethod
    def from_query(
        cls,
        category: Optional[str] = None,
        sizes: Iterable[str] = (),
        colors: Iterable[str] = (),
        price_range: Optional[str] = None,
        sort_by: Optional[SortMode] = None,
    ) -> "CatalogStore":
        store = cls()
        if category:
            store.set_category(category)
        for token in dict.fromkeys(sizes):
            store.toggle_size(Size.parse(token))
        for color in dict.fromkeys(colors):
            store.toggle_color(color)
        if price_range:
            store.set_price_range(price_range)
        if sort_by:
            store.set_sort_by(sort_by)
        return store

    def set_category(self, category: str) -> None:
        self.selection = replace(self.selection, category=category)

    def toggle_size(self, size: Size) -> None:
        self.selection = replace(self.selection, sizes=self.selection.sizes ^ {size})

    def toggle_color(self, color: str) -> None:
        self.selection = replace(
            self.selection, colors=self.selection.colors ^ {color}
        )

    def set_price_range(self, bucket_id: Optional[str]) -> None:
        """Select a bucket; selecting the active one (or None) clears it."""
        if bucket_id is not None:
            get_price_bucket(bucket_id)
        if bucket_id is None or bucket_id == self.selection.price_range:
            self.selection = replace(self.selection, price_range=None)
        else:
            self.selection = replace(self.selection, price_range=bucket_id)

    def set_sort_by(self, sort_by: SortMode) -> None:
        self.selection = replace(self.selection, sort_by=SortMode(sort_by))

    def clear_filters(self) -> None:
        self.selection = FilterSelection()
