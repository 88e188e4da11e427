"""
Custom exceptions module.

All errors derive from AppError and map to an HTTP status.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,
    DatabaseError,

    # Attribute catalog
    AttributeTypeNotFoundError,

    # Variant generation
    NoActiveAttributeTypesError,
    TooManyCombinationsError,

    # Variant submission
    VariantsRequiredError,
    InvalidVariantError,
    DuplicateSkuError,
    DuplicateCombinationError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",
    "DatabaseError",

    # Attribute catalog
    "AttributeTypeNotFoundError",

    # Variant generation
    "NoActiveAttributeTypesError",
    "TooManyCombinationsError",

    # Variant submission
    "VariantsRequiredError",
    "InvalidVariantError",
    "DuplicateSkuError",
    "DuplicateCombinationError",
]
