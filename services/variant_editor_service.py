"""
Variant editor service: admin-side variant grid regeneration.

Loads the attribute catalog, turns the operator's ticked options into an
option grid, bounds its size and hands it to the combination generator.
"""

import random
from typing import Optional
import structlog

from config import settings
from models.variant import GenerateVariantsRequest, Variant
from services.attribute_catalog_service import get_attribute_catalog_service
from services.combination_service import (
    build_option_grid,
    count_combinations,
    generate_variants,
    placeholder_defaults,
)
from services.variant_validation_service import validate_variants
from exceptions import AttributeTypeNotFoundError, TooManyCombinationsError

logger = structlog.get_logger(__name__)


class VariantEditorService:
    """
    Admin variant editor.

    Generation is synchronous and side-effect free; it only reads the
    catalog and returns the regenerated list for operator review.
    """

    def __init__(self):
        self.catalog_service = get_attribute_catalog_service()
        self.max_combinations = settings.max_variant_combinations
        self.placeholder_seed = settings.placeholder_seed

    def generate(self, request: GenerateVariantsRequest) -> list[Variant]:
        """
        Regenerate the variant grid from ticked options.

        Args:
            request: Ticked option ids per type plus the current variants

        Returns:
            Regenerated variants, existing edits preserved

        Raises:
            AttributeTypeNotFoundError: If a ticked type isn't in the catalog
            TooManyCombinationsError: If the grid exceeds the configured limit
            NoActiveAttributeTypesError: If nothing is ticked
        """
        catalog = self.catalog_service.get_catalog()
        known = {attribute_type.id for attribute_type in catalog}

        for type_id, option_ids in request.selected_option_ids.items():
            if option_ids and type_id not in known:
                raise AttributeTypeNotFoundError(type_id)

        grid = build_option_grid(
            catalog,
            {attribute_type.id: attribute_type.options for attribute_type in catalog},
            request.selected_option_ids,
        )

        combinations = count_combinations(grid)
        if combinations > self.max_combinations:
            logger.warning(
                "variant_grid_too_large",
                combinations=combinations,
                limit=self.max_combinations
            )
            raise TooManyCombinationsError(combinations, self.max_combinations)

        defaults_factory = None
        if request.use_placeholder_defaults:
            rng = random.Random(self.placeholder_seed)
            defaults_factory = lambda: placeholder_defaults(rng)

        return generate_variants(
            grid,
            request.existing_variants,
            defaults=request.defaults,
            defaults_factory=defaults_factory,
        )

    def validate(self, variants: list[Variant]) -> None:
        """Submission check without saving; raises on the first problem."""
        validate_variants(variants)


# Singleton instance for convenience
_variant_editor_service: Optional[VariantEditorService] = None

def get_variant_editor_service() -> VariantEditorService:
    """Get or create VariantEditorService instance."""
    global _variant_editor_service
    if _variant_editor_service is None:
        _variant_editor_service = VariantEditorService()
    return _variant_editor_service
