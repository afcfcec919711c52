"""Typed operation outcomes handed to the transport layer."""

from dataclasses import dataclass
from typing import Generic, Self, TypeVar

from catalog_core.domain.exceptions import CatalogError

T = TypeVar("T")


@dataclass
class CatalogResult(Generic[T]):
    """Result of a catalog operation.

    Exactly one of ``value`` and ``error`` is meaningful: a successful
    result carries the value, a failed one carries the typed error.

    Attributes:
        value: Operation output on success.
        error: Typed failure, or None on success.
    """

    value: T | None = None
    error: CatalogError | None = None

    @property
    def success(self) -> bool:
        """Whether the operation succeeded."""
        return self.error is None

    @property
    def error_code(self) -> str | None:
        """Machine-readable code of the failure, if any."""
        return self.error.error_code if self.error else None

    @classmethod
    def ok(cls, value: T) -> Self:
        """Build a successful result."""
        return cls(value=value)

    @classmethod
    def fail(cls, error: CatalogError) -> Self:
        """Build a failed result."""
        return cls(error=error)
