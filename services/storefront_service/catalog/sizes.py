"""Size taxonomy for catalog products.

A size is either a plain apparel token ("M", "XL") or a gendered value used for
footwear and waist sizing. In storage, gendered sizes keep the legacy prefixed
form ("mujer-7", "hombre-8"); everywhere else they are ``Size`` values.
"""

import enum
import re
from dataclasses import dataclass
from typing import Iterable, Optional


class SizeGroup(str, enum.Enum):
    APPAREL = "apparel"
    WOMEN = "women"
    MEN = "men"


# First prefix is the one written back to storage; the rest are read aliases.
GROUP_PREFIXES: dict[SizeGroup, tuple[str, ...]] = {
    SizeGroup.WOMEN: ("mujer-", "women-"),
    SizeGroup.MEN: ("hombre-", "men-"),
}

GROUP_LABELS = {
    SizeGroup.WOMEN: "Women",
    SizeGroup.MEN: "Men",
}

CLOTHING_SIZES = ["XS", "S", "M", "L", "XL", "XXL"]
SHOE_SIZES_WOMEN_US = [
    "5", "5.5", "6", "6.5", "7", "7.5", "8", "8.5",
    "9", "9.5", "10", "10.5", "11", "11.5", "12",
]
SHOE_SIZES_MEN_US = [
    "6", "6.5", "7", "7.5", "8", "8.5", "9", "9.5",
    "10", "10.5", "11", "11.5", "12", "13", "14",
]
PANT_SIZES = ["26", "27", "28", "29", "30", "31", "32", "33", "34", "36", "38"]

_FOOTWEAR_PATTERN = re.compile(r"zapato|calzado|shoe", re.IGNORECASE)
_PANTS_PATTERN = re.compile(r"pantalon|pantalones|pants|jeans", re.IGNORECASE)
_LEGACY_SHOE_SIZE = re.compile(r"^\d+(\.5)?$")


@dataclass(frozen=True)
class Size:
    group: SizeGroup
    value: str

    @classmethod
    def parse(cls, token: str) -> "Size":
        """Read a stored size token."""
        for group, prefixes in GROUP_PREFIXES.items():
            for prefix in prefixes:
                if token.startswith(prefix):
                    return cls(group, token[len(prefix):])
        return cls(SizeGroup.APPAREL, token)

    @property
    def token(self) -> str:
        """Storage form of this size."""
        if self.group is SizeGroup.APPAREL:
            return self.value
        return GROUP_PREFIXES[self.group][0] + self.value

    @property
    def label(self) -> str:
        """Human-readable form, e.g. ``7 (Women)``."""
        if self.group is SizeGroup.APPAREL:
            return self.value
        return f"{self.value} ({GROUP_LABELS[self.group]})"

    def __str__(self) -> str:
        return self.token


def parse_sizes(tokens: Optional[Iterable[str]]) -> list[Size]:
    return [Size.parse(t) for t in (tokens or []) if t]


def serialize_sizes(sizes: Iterable[Size]) -> list[str]:
    return [s.token for s in sizes]


def is_footwear_category(text: str) -> bool:
    return bool(_FOOTWEAR_PATTERN.search(text or ""))


def is_pants_category(text: str) -> bool:
    return bool(_PANTS_PATTERN.search(text or ""))


def normalize_legacy_sizes(tokens: Iterable[str]) -> list[str]:
    """Read bare half/whole numbers on older footwear products as women's sizes."""
    women = GROUP_PREFIXES[SizeGroup.WOMEN][0]
    normalized = []
    for token in tokens:
        size = Size.parse(token)
        if size.group is SizeGroup.APPAREL and _LEGACY_SHOE_SIZE.match(token):
            normalized.append(women + token)
        else:
            normalized.append(size.token)
    return normalized


def size_presets(category_slug: str, category_name: str = "") -> dict[str, list[str]]:
    """Suggested size tokens for a category, keyed by size group.

    Footwear gets women's and men's US sizes, pants get waist sizes for both
    groups, everything else gets lettered clothing sizes.
    """
    text = f"{category_slug} {category_name}"
    women = GROUP_PREFIXES[SizeGroup.WOMEN][0]
    men = GROUP_PREFIXES[SizeGroup.MEN][0]
    if is_footwear_category(text):
        return {
            SizeGroup.WOMEN.value: [women + s for s in SHOE_SIZES_WOMEN_US],
            SizeGroup.MEN.value: [men + s for s in SHOE_SIZES_MEN_US],
        }
    if is_pants_category(text):
        return {
            SizeGroup.WOMEN.value: [women + s for s in PANT_SIZES],
            SizeGroup.MEN.value: [men + s for s in PANT_SIZES],
        }
    return {SizeGroup.APPAREL.value: list(CLOTHING_SIZES)}
