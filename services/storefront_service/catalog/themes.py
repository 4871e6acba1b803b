"""Storefront presentation themes."""

import enum
from typing import Optional


class StoreTheme(str, enum.Enum):
    MODERN = "modern"
    CLASSIC = "classic"
    WOMEN = "women"
    MEN = "men"
    KIDS = "kids"
    MIXED = "mixed"
    LINGERIE = "lingerie"
    HOME = "home"


# Values written by earlier Spanish-language installs
LEGACY_THEME_ALIASES = {
    "moderno": StoreTheme.MODERN,
    "clasico": StoreTheme.CLASSIC,
    "dama": StoreTheme.WOMEN,
    "caballero": StoreTheme.MEN,
    "ninos": StoreTheme.KIDS,
    "mixto": StoreTheme.MIXED,
    "lenceria": StoreTheme.LINGERIE,
    "hogar": StoreTheme.HOME,
}


def parse_theme(raw: Optional[str]) -> Optional[StoreTheme]:
    if isinstance(raw, StoreTheme):
        return raw
    if not raw:
        return None
    value = str(raw).strip().lower()
    if value in LEGACY_THEME_ALIASES:
        return LEGACY_THEME_ALIASES[value]
    try:
        return StoreTheme(value)
    except ValueError:
        return None


def resolve_theme(raw: Optional[str], admin_surface: bool = False) -> StoreTheme:
    """Theme to render; admin surfaces are always ``modern``."""
    if admin_surface:
        return StoreTheme.MODERN
    return parse_theme(raw) or StoreTheme.MODERN
