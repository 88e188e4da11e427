"""
Custom exception classes for the application.

Every error carries a stable code, an HTTP status and a details dict so
routes can return the standard error body.
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "DUPLICATE_SKU")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class DatabaseError(AppError):
    """Database operation failed (500)."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="DATABASE_ERROR",
            message=f"Database {operation} failed: {message}",
            status_code=500,
            details={"operation": operation, **(details or {})}
        )


# ===================
# ATTRIBUTE CATALOG ERRORS
# ===================

class AttributeTypeNotFoundError(NotFoundError):
    """Attribute type not found in the catalog."""

    def __init__(self, type_id: str):
        super().__init__(
            resource="Attribute type",
            identifier=type_id,
            code="ATTRIBUTE_TYPE_NOT_FOUND"
        )


# ===================
# VARIANT GENERATION ERRORS
# ===================

class NoActiveAttributeTypesError(ValidationError):
    """Generation requested without a single chosen option."""

    def __init__(self):
        super().__init__(
            code="NO_ACTIVE_ATTRIBUTE_TYPES",
            message="Select at least one option from an attribute type"
        )


class TooManyCombinationsError(ValidationError):
    """Option grid would expand past the configured variant limit."""

    def __init__(self, combinations: int, limit: int):
        super().__init__(
            code="TOO_MANY_COMBINATIONS",
            message=f"Selected options produce {combinations} variants, limit is {limit}",
            details={"combinations": combinations, "limit": limit}
        )


# ===================
# VARIANT SUBMISSION ERRORS
# ===================

class VariantsRequiredError(ValidationError):
    """Submission contains no variants."""

    def __init__(self):
        super().__init__(
            code="VARIANTS_REQUIRED",
            message="Add at least one variant"
        )


class InvalidVariantError(ValidationError):
    """A single variant row failed a field check."""

    def __init__(self, index: int, field: str, message: str):
        super().__init__(
            code="INVALID_VARIANT",
            message=message,
            details={"index": index, "field": field}
        )


class DuplicateSkuError(ValidationError):
    """Two variants share a SKU (case-insensitive)."""

    def __init__(self, sku: str, indexes: list[int]):
        super().__init__(
            code="DUPLICATE_SKU",
            message="Duplicate SKU found. Each variant SKU must be unique",
            details={"sku": sku, "indexes": indexes}
        )


class DuplicateCombinationError(ValidationError):
    """Two variants represent the same attribute combination."""

    def __init__(self, signature: str, indexes: list[int]):
        super().__init__(
            code="DUPLICATE_COMBINATION",
            message="Duplicate variant combination found",
            details={"signature": signature, "indexes": indexes}
        )
