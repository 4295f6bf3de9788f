"""Exception types raised by the product service.

Every error the HTTP layer renders as a 500 derives from ProductServiceError.
A missing record is not an error: the storage gateway returns None for it.
"""

from dataclasses import dataclass
from typing import Any, List


@dataclass(frozen=True)
class FieldViolation:
    """A single schema constraint broken by a candidate product."""

    field: str  # Name of the offending field
    value: Any  # Raw value as received
    rule: str  # "required", "cast", "minlength", "maxlength", "enum", "min", "max", "pattern"
    message: str  # Human readable message


class ProductServiceError(Exception):
    """Base class for product service errors."""
    pass


class ProductValidationError(ProductServiceError):
    """Raised when a candidate product breaks one or more schema constraints."""

    def __init__(self, violations: List[FieldViolation]):
        self.violations = list(violations)
        details = ", ".join(f"{v.field}: {v.message}" for v in self.violations)
        super().__init__(f"Products validation failed: {details}")

    @property
    def first(self) -> FieldViolation:
        """The first violated constraint, in field declaration order."""
        return self.violations[0]


class MalformedRequestError(ProductServiceError):
    """Raised when a request body cannot be parsed into product fields."""
    pass


class StorageError(ProductServiceError):
    """Raised when the document store rejects or cannot serve an operation."""
    pass
