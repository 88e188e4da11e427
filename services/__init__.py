"""
Business logic services.

Pure variant engine (signatures live in utils.signature):
    combination_service, variant_resolver, availability_service,
    variant_validation_service, variant_display_service

Collaborators with I/O:
    attribute_catalog_service, product_variant_service,
    variant_editor_service, variant_selection_service
"""

from services.combination_service import (
    build_option_grid,
    count_combinations,
    generate_variants,
    placeholder_defaults,
)
from services.variant_resolver import resolve_variant, find_matching_variants
from services.availability_service import (
    AvailabilityEvaluator,
    is_option_available,
    evaluate_availability,
)
from services.variant_validation_service import validate_variants
from services.variant_display_service import summarize_variants
from services.attribute_catalog_service import (
    AttributeCatalogService,
    get_attribute_catalog_service,
)
from services.product_variant_service import (
    ProductVariantService,
    get_product_variant_service,
)
from services.variant_editor_service import (
    VariantEditorService,
    get_variant_editor_service,
)
from services.variant_selection_service import (
    VariantSelectionService,
    get_variant_selection_service,
    build_selection_response,
)

__all__ = [
    "build_option_grid",
    "count_combinations",
    "generate_variants",
    "placeholder_defaults",
    "resolve_variant",
    "find_matching_variants",
    "AvailabilityEvaluator",
    "is_option_available",
    "evaluate_availability",
    "validate_variants",
    "summarize_variants",
    "AttributeCatalogService",
    "get_attribute_catalog_service",
    "ProductVariantService",
    "get_product_variant_service",
    "VariantEditorService",
    "get_variant_editor_service",
    "VariantSelectionService",
    "get_variant_selection_service",
    "build_selection_response",
]
