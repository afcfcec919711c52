"""Product Catalog.

Validation, SKU uniqueness, guard rules, the transactional writer and
the soft-delete-aware reader, tied together by ``CatalogService``.
"""

from catalog_core.catalog.dtos import CategoryDTO, ProductDTO, ProductSummaryDTO, VariantDTO
from catalog_core.catalog.models import Category, Product, ProductStatus, Variant
from catalog_core.catalog.reader import CatalogReader, ProductFilter
from catalog_core.catalog.service import CatalogService, get_catalog_service
from catalog_core.catalog.writer import CatalogWriter

__all__ = [
    # Models
    "Category",
    "Product",
    "ProductStatus",
    "Variant",
    # DTOs
    "CategoryDTO",
    "ProductDTO",
    "ProductSummaryDTO",
    "VariantDTO",
    # Pipeline
    "CatalogReader",
    "CatalogWriter",
    "ProductFilter",
    # Service
    "CatalogService",
    "get_catalog_service",
]
