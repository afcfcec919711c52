"""Sample catalog data.

Loads a handful of categories and products so a fresh database has
something to browse. Products go through ``CatalogService`` so they
obey the same validation and uniqueness rules as API writes.
"""

from typing import Any

import structlog
from sqlalchemy import func, select

from catalog_core.catalog.models import Category, Product
from catalog_core.catalog.service import CatalogService
from catalog_core.infrastructure.database import Database

logger = structlog.get_logger()

SAMPLE_CATEGORIES = ["Apparel", "Footwear", "Accessories"]

SAMPLE_PRODUCTS: list[dict[str, Any]] = [
    {
        "name": "Classic Tee",
        "description": "Heavyweight cotton t-shirt",
        "category": "Apparel",
        "variants": [
            {"sku": "TEE-BLK-S", "name": "Black / S", "price_cents": 1999, "inventory_count": 25},
            {"sku": "TEE-BLK-M", "name": "Black / M", "price_cents": 1999, "inventory_count": 40},
            {"sku": "TEE-BLK-L", "name": "Black / L", "price_cents": 2199, "inventory_count": 15},
        ],
    },
    {
        "name": "Trail Runner",
        "description": "Lightweight trail running shoe",
        "category": "Footwear",
        "variants": [
            {"sku": "TRL-42", "name": "EU 42", "price_cents": 11900, "inventory_count": 6},
            {"sku": "TRL-43", "name": "EU 43", "price_cents": 11900, "inventory_count": 4},
        ],
    },
    {
        "name": "Canvas Tote",
        "description": None,
        "category": "Accessories",
        "status": "draft",
        "variants": [
            {"sku": "TOTE-NAT", "name": "Natural", "price_cents": 2500, "inventory_count": 30},
        ],
    },
    {
        "name": "Gift Card",
        "description": "Redeemable online",
        "category": None,
        "variants": [
            {"sku": "GIFT-25", "name": "25", "price_cents": 2500},
            {"sku": "GIFT-50", "name": "50", "price_cents": 5000},
        ],
    },
]


async def seed_categories(database: Database, names: list[str]) -> dict[str, int]:
    """Insert missing categories.

    Returns:
        Mapping of category name to id.
    """
    async with database.session() as session:
        async with session.begin():
            existing = await session.execute(select(Category).where(Category.name.in_(names)))
            by_name = {c.name: c for c in existing.scalars().all()}
            for name in names:
                if name not in by_name:
                    by_name[name] = Category(name=name)
                    session.add(by_name[name])
            await session.flush()
            return {name: category.id for name, category in by_name.items()}


async def seed_catalog(database: Database) -> dict[str, int]:
    """Seed sample categories and products.

    Products are only added when the catalog holds none, so running
    this twice is harmless.

    Returns:
        Counts of categories and products created.
    """
    category_ids = await seed_categories(database, SAMPLE_CATEGORIES)

    async with database.session() as session:
        product_count = (await session.execute(select(func.count(Product.id)))).scalar_one()
    if product_count:
        logger.info("Catalog already seeded", products=product_count)
        return {"categories": len(category_ids), "products": 0}

    service = CatalogService(database)
    created = 0
    for sample in SAMPLE_PRODUCTS:
        payload = {k: v for k, v in sample.items() if k != "category"}
        payload["category_id"] = category_ids.get(sample["category"]) if sample["category"] else None
        result = await service.create_product(payload)
        if not result.success:
            logger.warning("Sample product rejected", name=sample["name"], error=result.error.message)
            continue
        created += 1

    logger.info("Catalog seeded", categories=len(category_ids), products=created)
    return {"categories": len(category_ids), "products": created}
