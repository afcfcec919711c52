"""API layer module.

Contains FastAPI routers and response schemas.
"""

from catalog_core.api.categories import router as categories_router
from catalog_core.api.health import router as health_router
from catalog_core.api.products import router as products_router
from catalog_core.api.variants import router as variants_router

__all__ = [
    "categories_router",
    "health_router",
    "products_router",
    "variants_router",
]
