"""Integration tests for the public storefront endpoints."""

import uuid
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from libs.db.session import get_async_db
from sqlalchemy.exc import OperationalError
from tests.factories import (
    CategoryFactory,
    ProductFactory,
    StoreSettingsFactory,
    minutes_ago,
)


# ---------------------------------------------------------------------------
# System
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.integration
async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "storefront"}


@pytest.mark.asyncio
@pytest.mark.integration
async def test_request_id_is_echoed(client):
    response = await client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_backend_failure_returns_503(app, client):
    broken = MagicMock()
    broken.execute = AsyncMock(
        side_effect=OperationalError("SELECT", {}, Exception("connection refused"))
    )
    app.dependency_overrides[get_async_db] = lambda: broken

    response = await client.get("/store/categories")

    assert response.status_code == 503
    assert response.json()["code"] == "BACKEND_ERROR"


# ---------------------------------------------------------------------------
# Product list
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.integration
async def test_list_products_excludes_hidden(client, db_session):
    db_session.add_all(
        [
            ProductFactory.create(name="Visible"),
            ProductFactory.create(name="Hidden", is_visible=False),
        ]
    )
    await db_session.commit()

    response = await client.get("/store/products")

    assert response.status_code == 200
    data = response.json()
    assert [p["name"] for p in data["items"]] == ["Visible"]
    assert data["total"] == 1
    assert data["active_filter_count"] == 0


@pytest.mark.asyncio
@pytest.mark.integration
async def test_list_products_applies_filters_and_sort(client, db_session):
    db_session.add_all(
        [
            ProductFactory.create(
                name="Tacon Negro",
                category="zapatos",
                sizes=["mujer-7"],
                colors=["Negro"],
                price=Decimal("80.00"),
                created_at=minutes_ago(3),
            ),
            ProductFactory.create(
                name="Bota Negra",
                category="zapatos",
                sizes=["mujer-7", "mujer-8"],
                colors=["Negro Mate"],
                price=Decimal("60.00"),
                created_at=minutes_ago(2),
            ),
            ProductFactory.create(
                name="Sandalia",
                category="zapatos",
                sizes=["mujer-6"],
                colors=["Negro"],
                price=Decimal("55.00"),
                created_at=minutes_ago(1),
            ),
            ProductFactory.create(
                name="Vestido Negro",
                category="vestidos",
                sizes=["M"],
                colors=["Negro"],
                price=Decimal("70.00"),
            ),
        ]
    )
    await db_session.commit()

    response = await client.get(
        "/store/products",
        params={
            "category": "zapatos",
            "sizes": ["women-7"],
            "colors": ["negro"],
            "price_range": "50-100",
            "sort": "price-asc",
        },
    )

    assert response.status_code == 200, response.text
    data = response.json()
    assert [p["name"] for p in data["items"]] == ["Bota Negra", "Tacon Negro"]
    assert data["items"][0]["sizes"] == ["mujer-7", "mujer-8"]
    assert data["active_filter_count"] == 3


@pytest.mark.asyncio
@pytest.mark.integration
async def test_list_products_search(client, db_session):
    db_session.add_all(
        [
            ProductFactory.create(name="Blusa Seda", sku="BLU-01"),
            ProductFactory.create(name="Falda", sku="FAL-01"),
        ]
    )
    await db_session.commit()

    response = await client.get("/store/products", params={"search": "blu"})

    assert [p["sku"] for p in response.json()["items"]] == ["BLU-01"]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_unknown_price_range_is_rejected(client):
    response = await client.get("/store/products", params={"price_range": "cheap"})
    assert response.status_code == 422


# ---------------------------------------------------------------------------
# Product detail
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.integration
async def test_product_detail_with_local_price(client, db_session):
    product = ProductFactory.create(
        price=Decimal("49.90"), sizes=["mujer-7", "hombre-8", "M"]
    )
    db_session.add_all(
        [product, StoreSettingsFactory.create(exchange_rate=Decimal("36.5"))]
    )
    await db_session.commit()

    response = await client.get(f"/store/products/{product.id}")

    assert response.status_code == 200
    data = response.json()
    assert Decimal(data["price_local"]) == Decimal("1821.35")
    assert Decimal(data["exchange_rate"]) == Decimal("36.5")
    assert data["size_labels"] == ["7 (Women)", "8 (Men)", "M"]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_product_detail_without_rate(client, db_session):
    product = ProductFactory.create()
    db_session.add(product)
    await db_session.commit()

    data = (await client.get(f"/store/products/{product.id}")).json()

    assert data["price_local"] is None
    assert data["exchange_rate"] is None


@pytest.mark.asyncio
@pytest.mark.integration
async def test_product_detail_not_found(client, db_session):
    hidden = ProductFactory.create(is_visible=False)
    db_session.add(hidden)
    await db_session.commit()

    assert (await client.get(f"/store/products/{uuid.uuid4()}")).status_code == 404
    assert (await client.get(f"/store/products/{hidden.id}")).status_code == 404


# ---------------------------------------------------------------------------
# Facets, categories, settings
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.integration
async def test_facets(client, db_session):
    db_session.add_all(
        [
            ProductFactory.create(sizes=["M", "women-7", "hombre-8"], colors=["Rojo"]),
            ProductFactory.create(sizes=["mujer-10"], colors=["Azul", "rojo"]),
            ProductFactory.create(sizes=["XL"], colors=["Verde"], is_visible=False),
        ]
    )
    await db_session.commit()

    response = await client.get("/store/facets")

    assert response.status_code == 200
    data = response.json()
    assert data["sizes"] == {"apparel": ["M"], "women": ["7", "10"], "men": ["8"]}
    assert data["colors"] == ["Azul", "Rojo"]
    assert [r["id"] for r in data["price_ranges"]] == [
        "under-50",
        "50-100",
        "100-200",
        "over-200",
    ]
    assert data["price_ranges"][-1]["max"] is None


@pytest.mark.asyncio
@pytest.mark.integration
async def test_public_categories_are_visible_ones_in_order(client, db_session):
    db_session.add_all(
        [
            CategoryFactory.create(name="Zapatos", display_order=2),
            CategoryFactory.create(name="Vestidos", display_order=1),
            CategoryFactory.create(name="Borrador", display_order=0, is_visible=False),
        ]
    )
    await db_session.commit()

    response = await client.get("/store/categories")

    assert [c["name"] for c in response.json()] == ["Vestidos", "Zapatos"]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_settings_defaults_before_first_save(client):
    response = await client.get("/store/settings")

    assert response.status_code == 200
    data = response.json()
    assert data["theme"] == "modern"
    assert data["shop_name"] == ""


@pytest.mark.asyncio
@pytest.mark.integration
async def test_settings_resolve_legacy_theme(client, db_session):
    db_session.add(StoreSettingsFactory.create(theme="dama"))
    await db_session.commit()

    data = (await client.get("/store/settings")).json()

    assert data["theme"] == "women"
    assert data["contact_whatsapp"] == "+58 (412) 555-1234"


# ---------------------------------------------------------------------------
# Session & analytics
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.integration
async def test_create_session(client):
    first = await client.post("/store/session")
    second = await client.post("/store/session")

    assert first.status_code == 201
    assert first.json()["session_id"] != second.json()["session_id"]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_record_event(client, db_session):
    product = ProductFactory.create()
    db_session.add(product)
    await db_session.commit()

    response = await client.post(
        "/store/events",
        json={
            "event_type": "product_view",
            "product_id": str(product.id),
            "session_id": "abc",
        },
    )

    assert response.status_code == 202


@pytest.mark.asyncio
@pytest.mark.integration
async def test_record_event_accepted_when_backend_fails(app, client):
    broken = MagicMock()
    broken.commit = AsyncMock(
        side_effect=OperationalError("INSERT", {}, Exception("connection refused"))
    )
    broken.rollback = AsyncMock()
    app.dependency_overrides[get_async_db] = lambda: broken

    response = await client.post(
        "/store/events", json={"event_type": "product_view", "session_id": "abc"}
    )

    assert response.status_code == 202


@pytest.mark.asyncio
@pytest.mark.integration
async def test_record_event_rejects_unknown_type(client):
    response = await client.post(
        "/store/events", json={"event_type": "purchase", "session_id": "abc"}
    )
    assert response.status_code == 422
