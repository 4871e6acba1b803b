#!/usr/bin/env python3
"""
Seed a demo storefront catalog.

Creates the storefront tables if they are missing, then inserts:
1. Four categories (dresses, blouses, shoes, pants)
2. A handful of products covering apparel, footwear and waist sizes
3. Store settings with a WhatsApp number and an exchange rate

Safe to run repeatedly: existing categories (by slug), products (by SKU) and
the settings row are left as they are.
"""

import asyncio
import os
import sys
from decimal import Decimal

# Add project root to path
project_root = os.path.dirname(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
)
sys.path.insert(0, project_root)

from libs.db.base import Base
from libs.db.config import get_engine, get_session_factory
from services.storefront_service.models import Category, Product, StoreSettings
from sqlalchemy.future import select

CATEGORIES = [
    {"name": "Vestidos", "slug": "vestidos", "display_order": 1},
    {"name": "Blusas", "slug": "blusas", "display_order": 2},
    {"name": "Zapatos", "slug": "zapatos", "display_order": 3},
    {"name": "Pantalones", "slug": "pantalones", "display_order": 4},
]

PRODUCTS = [
    {
        "sku": "VES-001",
        "name": "Vestido Floral",
        "price": Decimal("45.00"),
        "category": "vestidos",
        "sizes": ["S", "M", "L"],
        "colors": ["Rojo", "Azul Marino"],
        "stock": 8,
        "is_new": True,
    },
    {
        "sku": "BLU-001",
        "name": "Blusa de Seda",
        "price": Decimal("62.50"),
        "category": "blusas",
        "sizes": ["XS", "S", "M"],
        "colors": ["Blanco", "Negro"],
        "stock": 3,
    },
    {
        "sku": "ZAP-001",
        "name": "Tacon Clasico",
        "price": Decimal("120.00"),
        "category": "zapatos",
        "sizes": ["mujer-6", "mujer-7", "mujer-7.5", "mujer-8"],
        "colors": ["Negro"],
        "stock": 5,
        "is_premium": True,
    },
    {
        "sku": "ZAP-002",
        "name": "Mocasin de Cuero",
        "price": Decimal("210.00"),
        "category": "zapatos",
        "sizes": ["hombre-8", "hombre-9", "hombre-10"],
        "colors": ["Marron", "Negro"],
        "stock": 0,
    },
    {
        "sku": "PAN-001",
        "name": "Jean Recto",
        "price": Decimal("38.90"),
        "category": "pantalones",
        "sizes": ["mujer-26", "mujer-28", "hombre-32"],
        "colors": ["Azul"],
        "stock": 12,
    },
]

SETTINGS = {
    "shop_name": "Boutique Demo",
    "exchange_rate": Decimal("36.50"),
    "contact_whatsapp": "+58 412 555 1234",
    "contact_instagram": "@boutiquedemo",
    "contact_email": "hola@boutiquedemo.com",
    "theme": "modern",
}


async def seed_catalog():
    """Create tables and insert demo categories, products and settings."""
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with get_session_factory()() as session:
        async with session.begin():
            for category_data in CATEGORIES:
                stmt = select(Category).where(Category.slug == category_data["slug"])
                if (await session.execute(stmt)).scalar_one_or_none():
                    print(f"  Category '{category_data['slug']}' already exists, skipping...")
                    continue
                session.add(Category(**category_data))
                print(f"  Created category: {category_data['name']}")

            for product_data in PRODUCTS:
                stmt = select(Product).where(Product.sku == product_data["sku"])
                if (await session.execute(stmt)).scalar_one_or_none():
                    print(f"  Product '{product_data['sku']}' already exists, skipping...")
                    continue
                session.add(
                    Product(**product_data, is_in_stock=product_data["stock"] > 0)
                )
                print(f"  Created product: {product_data['sku']} {product_data['name']}")

            existing = (await session.execute(select(StoreSettings).limit(1))).scalars().first()
            if existing:
                print("  Store settings already exist, skipping...")
            else:
                session.add(StoreSettings(**SETTINGS))
                print(f"  Created store settings for {SETTINGS['shop_name']}")

    print("\n✓ Storefront catalog seeded successfully!")


if __name__ == "__main__":
    print("Seeding demo storefront catalog...")
    asyncio.run(seed_catalog())
