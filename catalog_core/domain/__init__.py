"""Domain layer module.

Error taxonomy and typed results shared by the catalog pipeline and
the API layer.
"""

from catalog_core.domain.exceptions import (
    CatalogError,
    ConflictError,
    InternalError,
    InvalidInputError,
    NotFoundError,
)
from catalog_core.domain.results import CatalogResult

__all__ = [
    "CatalogError",
    "CatalogResult",
    "ConflictError",
    "InternalError",
    "InvalidInputError",
    "NotFoundError",
]
