import re
import unicodedata

_WHITESPACE = re.compile(r"\s+")
_DISALLOWED = re.compile(r"[^a-z0-9-]")


def slugify(name: str) -> str:
    """URL-safe slug: "Ropa de Niños" -> "ropa-de-ninos"."""
    text = unicodedata.normalize("NFD", name.lower())
    text = "".join(c for c in text if not unicodedata.combining(c))
    text = _WHITESPACE.sub("-", text)
    return _DISALLOWED.sub("", text)
