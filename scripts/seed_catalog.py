#!/usr/bin/env python3
"""Seed the product catalog with sample data.

Usage:
    python scripts/seed_catalog.py
    python scripts/seed_catalog.py --database-url sqlite+aiosqlite:///./demo.db
"""

import argparse
import asyncio

from catalog_core.catalog.seed import seed_catalog
from catalog_core.infrastructure.config import settings
from catalog_core.infrastructure.database import Database
from catalog_core.infrastructure.logging import configure_logging


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Seed the product catalog with sample data")
    parser.add_argument(
        "--database-url",
        default=settings.database_url,
        help=f"Database URL (default: {settings.database_url})",
    )
    args = parser.parse_args()

    configure_logging(settings)
    database = Database(args.database_url)
    try:
        await database.create_all()
        result = await seed_catalog(database)
    finally:
        await database.dispose()

    print(f"Categories: {result['categories']}")
    print(f"Products created: {result['products']}")


if __name__ == "__main__":
    asyncio.run(main())
