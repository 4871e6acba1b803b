"""Unit tests for the product filter/sort pipeline and facet derivation."""

import uuid
from datetime import datetime, timezone
from decimal import Decimal

import pytest
from services.storefront_service.catalog.facets import derive_facets
from services.storefront_service.catalog.filters import CatalogStore, FilterSelection
from services.storefront_service.catalog.pipeline import filter_products
from services.storefront_service.schemas import ProductResponse

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _product(name, price="10.00", **overrides) -> ProductResponse:
    now = datetime.now(timezone.utc)
    data = {
        "id": uuid.uuid4(),
        "sku": None,
        "name": name,
        "price": Decimal(price),
        "category": "vestidos",
        "sizes": [],
        "colors": [],
        "is_visible": True,
        "created_at": now,
        "updated_at": now,
    }
    data.update(overrides)
    return ProductResponse.model_validate(data)


def _names(products):
    return [p.name for p in products]


# ---------------------------------------------------------------------------
# Visibility and search
# ---------------------------------------------------------------------------


def test_hidden_products_never_returned():
    products = [_product("Visible"), _product("Oculto", is_visible=False)]
    assert _names(filter_products(products, "", FilterSelection())) == ["Visible"]


def test_search_matches_name_or_sku_case_insensitively():
    products = [
        _product("Vestido Rojo", sku="VES-001"),
        _product("Blusa", sku="BLU-777"),
        _product("Falda", sku=None),
    ]
    assert _names(filter_products(products, "vestido", FilterSelection())) == [
        "Vestido Rojo"
    ]
    assert _names(filter_products(products, "blu-7", FilterSelection())) == ["Blusa"]


def test_search_is_complete():
    products = [
        _product("Camisa Azul", sku="CAM-1"),
        _product("Pantalon", sku="PANT-CAMEL"),
        _product("Camiseta", sku="TS-2"),
        _product("Zapato", sku="ZAP-1"),
        _product("Camisa oculta", sku="CAM-9", is_visible=False),
    ]
    query = "cam"
    result = filter_products(products, query, FilterSelection())
    expected = [
        p
        for p in products
        if p.is_visible
        and (query in p.name.lower() or (p.sku and query in p.sku.lower()))
    ]
    assert result == expected


def test_blank_search_keeps_everything():
    products = [_product("A"), _product("B")]
    assert len(filter_products(products, "   ", FilterSelection())) == 2


def test_padded_search_matches_the_query_as_typed():
    products = [_product("Dress"), _product("Red Dress"), _product("Dress Shirt")]
    result = filter_products(products, "dress ", FilterSelection())
    assert _names(result) == ["Dress Shirt"]
    assert all("dress " in p.name.lower() for p in result)


# ---------------------------------------------------------------------------
# Facet filters
# ---------------------------------------------------------------------------


def test_category_filter():
    products = [_product("A", category="zapatos"), _product("B", category="vestidos")]
    selection = CatalogStore.from_query(category="zapatos").selection
    assert _names(filter_products(products, "", selection)) == ["A"]


def test_size_filter_matches_any_selected_size():
    products = [
        _product("Tacon", sizes=["mujer-7"]),
        _product("Mocasin", sizes=["hombre-7"]),
        _product("Blusa", sizes=["M"]),
    ]
    selection = CatalogStore.from_query(sizes=["women-7", "M"]).selection
    assert _names(filter_products(products, "", selection)) == ["Tacon", "Blusa"]


def test_color_filter_uses_substring_match():
    products = [
        _product("A", colors=["Azul Marino"]),
        _product("B", colors=["Rojo"]),
        _product("C", colors=["azul"]),
    ]
    selection = CatalogStore.from_query(colors=["Azul"]).selection
    assert _names(filter_products(products, "", selection)) == ["A", "C"]


def test_price_filter_uses_bucket_bounds():
    products = [
        _product("Cheap", price="49.99"),
        _product("Edge", price="50.00"),
        _product("Mid", price="75.00"),
        _product("High", price="100.01"),
    ]
    selection = CatalogStore.from_query(price_range="50-100").selection
    assert _names(filter_products(products, "", selection)) == ["Edge", "Mid"]


def test_filters_are_conjunctive():
    products = [
        _product("Match", colors=["Negro"], sizes=["M"], price="30"),
        _product("Wrong size", colors=["Negro"], sizes=["L"], price="30"),
        _product("Wrong price", colors=["Negro"], sizes=["M"], price="300"),
    ]
    selection = CatalogStore.from_query(
        sizes=["M"], colors=["negro"], price_range="under-50"
    ).selection
    assert _names(filter_products(products, "", selection)) == ["Match"]


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------


def test_newest_keeps_input_order():
    products = [_product("New"), _product("Old")]
    assert _names(filter_products(products, "", FilterSelection())) == ["New", "Old"]


def test_price_sorts_are_stable():
    products = [
        _product("A", price="20"),
        _product("B", price="10"),
        _product("C", price="20"),
        _product("D", price="10"),
    ]
    asc = CatalogStore.from_query(sort_by="price-asc").selection
    desc = CatalogStore.from_query(sort_by="price-desc").selection
    assert _names(filter_products(products, "", asc)) == ["B", "D", "A", "C"]
    assert _names(filter_products(products, "", desc)) == ["A", "C", "B", "D"]


def test_input_list_is_not_modified():
    products = [_product("B", price="20"), _product("A", price="10")]
    original = list(products)
    filter_products(products, "", CatalogStore.from_query(sort_by="price-asc").selection)
    assert products == original


# ---------------------------------------------------------------------------
# Facets
# ---------------------------------------------------------------------------


def test_facets_split_sizes_by_group():
    products = [_product("A", sizes=["M", "women-7", "hombre-8"])]
    facets = derive_facets(products)
    assert facets.sizes.apparel == ["M"]
    assert facets.sizes.women == ["7"]
    assert facets.sizes.men == ["8"]


def test_facets_sort_numeric_sizes_numerically():
    products = [
        _product("A", sizes=["mujer-10", "mujer-7.5", "mujer-9"]),
        _product("B", sizes=["mujer-7.5", "hombre-12", "hombre-8"]),
    ]
    facets = derive_facets(products)
    assert facets.sizes.women == ["7.5", "9", "10"]
    assert facets.sizes.men == ["8", "12"]


def test_facets_ignore_hidden_products_and_dedupe_colors():
    products = [
        _product("A", colors=["Rojo", "Azul"]),
        _product("B", colors=["rojo", "Ámbar"]),
        _product("C", colors=["Verde"], sizes=["XL"], is_visible=False),
    ]
    facets = derive_facets(products)
    assert facets.colors == ["Ámbar", "Azul", "Rojo"]
    assert facets.sizes.apparel == []
    assert [b.id for b in facets.price_ranges] == [
        "under-50",
        "50-100",
        "100-200",
        "over-200",
    ]


def test_color_facet_casing_does_not_depend_on_product_order():
    first = _product("A", colors=["rojo"])
    second = _product("B", colors=["Rojo"])
    assert derive_facets([first, second]).colors == ["Rojo"]
    assert derive_facets([second, first]).colors == ["Rojo"]


def test_color_facet_prefers_most_common_casing():
    products = [
        _product("A", colors=["azul"]),
        _product("B", colors=["azul"]),
        _product("C", colors=["Azul"]),
    ]
    assert derive_facets(products).colors == ["azul"]
