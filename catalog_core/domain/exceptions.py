"""Domain exceptions.

All catalog-level failures. Validators, uniqueness checks and guard
rules raise these; ``CatalogService`` catches them at its boundary and
hands them to the transport layer inside a failed ``CatalogResult``.
"""

from typing import Any


class CatalogError(Exception):
    """Base class for all catalog exceptions.

    Attributes:
        message: Human-readable error message.
        details: Additional error context (field, index, ids).
    """

    error_code: str = "CATALOG_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize catalog error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Client-fixable Errors
# ============================================================================


class InvalidInputError(CatalogError):
    """Malformed, missing or out-of-range input, or a violated guard rule.

    Never retried; the caller must fix the request.
    """

    error_code = "INVALID_INPUT"

    def __init__(
        self,
        message: str,
        field: str | None = None,
        index: int | None = None,
    ) -> None:
        """Initialize invalid input error.

        Args:
            message: Description of the violation.
            field: Name of the offending field, if any.
            index: Variant index within the request, if any.
        """
        details: dict[str, Any] = {}
        if field is not None:
            details["field"] = field
        if index is not None:
            details["index"] = index
        super().__init__(message, details=details)
        self.field = field
        self.index = index


class ConflictError(CatalogError):
    """A SKU collides with one that is already persisted."""

    error_code = "CONFLICT"

    def __init__(self, sku: str | None) -> None:
        """Initialize conflict error.

        Args:
            sku: The colliding SKU, or None when only the storage layer
                reported the collision.
        """
        if sku is None:
            super().__init__("SKU already exists")
        else:
            super().__init__(f'SKU "{sku}" already exists', details={"sku": sku})
        self.sku = sku


class NotFoundError(CatalogError):
    """An id does not resolve to a row."""

    error_code = "NOT_FOUND"

    def __init__(self, resource: str, resource_id: int) -> None:
        """Initialize not found error.

        Args:
            resource: Resource name (e.g., "Product", "Variant").
            resource_id: The id that did not resolve.
        """
        super().__init__(
            f"{resource} not found",
            details={"resource": resource, "id": resource_id},
        )
        self.resource = resource
        self.resource_id = resource_id


# ============================================================================
# Storage Errors
# ============================================================================


class InternalError(CatalogError):
    """Storage failure not attributable to the caller.

    The message is generic; the raw diagnostic is kept in ``detail`` for
    logging and is not meant as the user-facing message.
    """

    error_code = "INTERNAL_ERROR"

    def __init__(self, detail: str, message: str = "An internal error occurred") -> None:
        """Initialize internal error.

        Args:
            detail: Raw storage diagnostic.
            message: User-facing message.
        """
        super().__init__(message)
        self.detail = detail
