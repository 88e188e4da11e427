"""
Pydantic models for validation and serialization.
"""

from models.base import BaseSchema
from models.attribute import (
    AttributeStatus,
    AttributeType,
    AttributeOption,
    AttributeTypeWithOptions,
    AttributeGridEntry,
)
from models.variant import (
    TEMP_ID_PREFIX,
    AttributeSelection,
    new_temp_id,
    VariantStatus,
    VariantOption,
    VariantImage,
    Variant,
    VariantDefaults,
    GenerateVariantsRequest,
    SaveVariantsRequest,
    VariantListResponse,
)
from models.variant_selection import (
    OptionState,
    SelectionStatus,
    OptionAvailability,
    AttributeAvailability,
    PriceRange,
    VariantDisplaySummary,
    SelectionRequest,
    VariantSelectionResponse,
)

__all__ = [
    # Base
    "BaseSchema",

    # Attribute catalog
    "AttributeStatus",
    "AttributeType",
    "AttributeOption",
    "AttributeTypeWithOptions",
    "AttributeGridEntry",

    # Variants
    "TEMP_ID_PREFIX",
    "AttributeSelection",
    "new_temp_id",
    "VariantStatus",
    "VariantOption",
    "VariantImage",
    "Variant",
    "VariantDefaults",
    "GenerateVariantsRequest",
    "SaveVariantsRequest",
    "VariantListResponse",

    # Selection
    "OptionState",
    "SelectionStatus",
    "OptionAvailability",
    "AttributeAvailability",
    "PriceRange",
    "VariantDisplaySummary",
    "SelectionRequest",
    "VariantSelectionResponse",
]
