"""Request validation for catalog writes.

Turns a decoded request body (any JSON-like value, shape not yet
checked) into a typed draft or change set. Validation is fail-fast:
the first violation raises ``InvalidInputError`` naming the field and,
for variants, the index that failed.
"""

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

from catalog_core.catalog.models import MAX_INTEGER, ProductStatus, fits_integer_column
from catalog_core.domain.exceptions import InvalidInputError

VALID_STATUSES = tuple(status.value for status in ProductStatus)

class _Unset:
    """Marks a field that was not supplied in a partial update."""

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


# ============================================================================
# Validated Shapes
# ============================================================================


@dataclass(frozen=True)
class VariantDraft:
    """Validated variant of a new product."""

    sku: str
    name: str
    price_cents: int = 0
    inventory_count: int = 0


@dataclass(frozen=True)
class ProductDraft:
    """Validated product create request."""

    name: str
    variants: tuple[VariantDraft, ...]
    description: str | None = None
    category_id: int | None = None
    status: str = ProductStatus.ACTIVE.value

    @property
    def skus(self) -> list[str]:
        """SKUs in request order."""
        return [variant.sku for variant in self.variants]


@dataclass(frozen=True)
class _Changes:
    """Field-presence map for partial updates.

    Fields left at ``UNSET`` were not supplied and must not be touched.
    """

    def as_values(self) -> dict[str, Any]:
        """Supplied fields only, ready for an UPDATE ... SET clause."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }

    def is_empty(self) -> bool:
        """Whether no field was supplied."""
        return not self.as_values()


@dataclass(frozen=True)
class ProductChanges(_Changes):
    """Validated partial product update."""

    name: Any = UNSET
    description: Any = UNSET
    category_id: Any = UNSET
    status: Any = UNSET


@dataclass(frozen=True)
class VariantChanges(_Changes):
    """Validated partial variant update."""

    sku: Any = UNSET
    name: Any = UNSET
    price_cents: Any = UNSET
    inventory_count: Any = UNSET


# ============================================================================
# Field Checks
# ============================================================================


def _non_empty_string(value: Any) -> str | None:
    """Trimmed string, or None when the value is not a non-blank string."""
    if not isinstance(value, str):
        return None
    trimmed = value.strip()
    return trimmed or None


def _non_negative_whole(value: Any) -> int | None:
    """Value as int, or None when it is not a whole number in [0, MAX_INTEGER].

    Booleans are rejected even though they subclass int. Floats are
    accepted only when integral (JSON decoders may produce ``5.0``).
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not value.is_integer():
        return None
    if value < 0 or value > MAX_INTEGER:
        return None
    return int(value)


def _require_mapping(payload: Any, message: str) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise InvalidInputError(message)
    return payload


def _check_status(value: Any) -> str:
    if value not in VALID_STATUSES:
        raise InvalidInputError(
            f"Invalid status. Must be one of: {', '.join(VALID_STATUSES)}",
            field="status",
        )
    return value


def _check_description(value: Any) -> str | None:
    if value is not None and not isinstance(value, str):
        raise InvalidInputError("Description must be a string", field="description")
    return value


def _check_category_id(value: Any) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError("category_id must be an integer", field="category_id")
    if not fits_integer_column(value):
        raise InvalidInputError("Category not found", field="category_id")
    return value


def _check_variant(index: int, raw: Any) -> VariantDraft:
    variant = _require_mapping(raw, f"Variant at index {index} must be an object")

    sku = _non_empty_string(variant.get("sku"))
    if sku is None:
        raise InvalidInputError(
            f"Variant at index {index} is missing a SKU", field="sku", index=index
        )

    name = _non_empty_string(variant.get("name"))
    if name is None:
        raise InvalidInputError(
            f"Variant at index {index} is missing a name", field="name", index=index
        )

    price_cents = 0
    if variant.get("price_cents") is not None:
        price_cents = _non_negative_whole(variant["price_cents"])
        if price_cents is None:
            raise InvalidInputError(
                f"Variant at index {index} has an invalid price (must be >= 0)",
                field="price_cents",
                index=index,
            )

    inventory_count = 0
    if variant.get("inventory_count") is not None:
        inventory_count = _non_negative_whole(variant["inventory_count"])
        if inventory_count is None:
            raise InvalidInputError(
                f"Variant at index {index} has an invalid inventory count (must be >= 0)",
                field="inventory_count",
                index=index,
            )

    return VariantDraft(
        sku=sku,
        name=name,
        price_cents=price_cents,
        inventory_count=inventory_count,
    )


# ============================================================================
# Entry Points
# ============================================================================


def validate_new_product(payload: Any) -> ProductDraft:
    """Validate a product create request.

    Args:
        payload: Decoded request body.

    Returns:
        ProductDraft with trimmed names/SKUs and defaults applied.

    Raises:
        InvalidInputError: On the first violation found.
    """
    body = _require_mapping(payload, "Request body must be an object")

    name = _non_empty_string(body.get("name"))
    if name is None:
        raise InvalidInputError("Product name is required", field="name")

    raw_variants = body.get("variants")
    if not isinstance(raw_variants, list) or not raw_variants:
        raise InvalidInputError("At least one variant is required", field="variants")

    status = body.get("status")
    status = ProductStatus.ACTIVE.value if status is None else _check_status(status)

    description = _check_description(body.get("description"))
    category_id = _check_category_id(body.get("category_id"))

    variants = tuple(_check_variant(i, raw) for i, raw in enumerate(raw_variants))

    return ProductDraft(
        name=name,
        variants=variants,
        description=description,
        category_id=category_id,
        status=status,
    )


def validate_product_changes(payload: Any) -> ProductChanges:
    """Validate a partial product update.

    Only keys present in the payload are checked. ``description`` and
    ``category_id`` may be set to null; ``name`` and ``status`` may not.
    A payload with no recognized key is valid and only refreshes the
    modification timestamp.

    An explicit null is never read as "keep the current value" (the
    COALESCE-style merge some clients expect): omit the key for that.
    Null clears a nullable field and is rejected for a required one.

    Raises:
        InvalidInputError: On the first violation found.
    """
    body = _require_mapping(payload, "Request body must be an object")
    changes: dict[str, Any] = {}

    if "name" in body:
        name = _non_empty_string(body["name"])
        if name is None:
            raise InvalidInputError("Product name must be a non-empty string", field="name")
        changes["name"] = name

    if "description" in body:
        changes["description"] = _check_description(body["description"])

    if "category_id" in body:
        changes["category_id"] = _check_category_id(body["category_id"])

    if "status" in body:
        changes["status"] = _check_status(body["status"])

    return ProductChanges(**changes)


def validate_variant_changes(payload: Any) -> VariantChanges:
    """Validate a partial variant update.

    Raises:
        InvalidInputError: On the first violation, or when no recognized
            field was supplied.
    """
    body = _require_mapping(payload, "Request body must be an object")
    changes: dict[str, Any] = {}

    if "name" in body:
        name = _non_empty_string(body["name"])
        if name is None:
            raise InvalidInputError("Variant name must be a non-empty string", field="name")
        changes["name"] = name

    if "sku" in body:
        sku = _non_empty_string(body["sku"])
        if sku is None:
            raise InvalidInputError("SKU must be a non-empty string", field="sku")
        changes["sku"] = sku

    for field_name in ("price_cents", "inventory_count"):
        if field_name in body:
            value = _non_negative_whole(body[field_name])
            if value is None:
                raise InvalidInputError(
                    f"{field_name} must be a number >= 0", field=field_name
                )
            changes[field_name] = value

    result = VariantChanges(**changes)
    if result.is_empty():
        raise InvalidInputError("No fields provided to update")
    return result
