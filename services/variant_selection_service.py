"""
Variant selection service: storefront side of the variant engine.

On every selection change the product page needs three things computed
against the same selection: the resolved variant, the availability of
each selector option, and the display summary.
"""

from typing import Mapping, Optional, Sequence
import structlog

from config import settings
from models.variant import Variant
from models.variant_selection import SelectionStatus, VariantSelectionResponse
from services.product_variant_service import get_product_variant_service
from services.availability_service import AvailabilityEvaluator
from services.variant_resolver import (
    attribute_type_ids,
    find_matching_variants,
    resolve_variant,
)
from services.variant_display_service import summarize_variants
from utils.signature import selection_pairs

logger = structlog.get_logger(__name__)


def build_selection_response(
    variants: Sequence[Variant],
    selection: Optional[Mapping[str, str]],
    include_inactive: bool = False,
    low_stock_threshold: int = 10,
) -> VariantSelectionResponse:
    """
    Resolve a selection and describe the product page state.

    Args:
        variants: All variants of the product
        selection: type_id -> option_id, possibly partial
        include_inactive: Keep inactive variants in view
        low_stock_threshold: Passed to the display summary

    Returns:
        VariantSelectionResponse
    """
    in_view = list(variants) if include_inactive else [v for v in variants if v.is_active]
    current = dict(selection_pairs(selection))

    type_ids = attribute_type_ids(in_view)
    is_complete = bool(type_ids) and type_ids <= set(current)

    availability = AvailabilityEvaluator(in_view).evaluate(current)

    if not current:
        status = SelectionStatus.NONE_SELECTED
        variant = None
        matching = in_view
    else:
        variant = resolve_variant(in_view, current)
        status = SelectionStatus.MATCHED if variant is not None else SelectionStatus.NO_MATCH
        matching = find_matching_variants(in_view, current)

    # A selection no variant carries has nothing to price or stock
    display = summarize_variants(
        matching,
        resolved=variant if is_complete else None,
        low_stock_threshold=low_stock_threshold,
    )

    return VariantSelectionResponse(
        selection=current,
        status=status,
        is_complete=is_complete,
        variant=variant,
        availability=availability,
        display=display,
    )


class VariantSelectionService:
    """Storefront selection against persisted variants."""

    def __init__(self):
        self.variant_service = get_product_variant_service()
        self.low_stock_threshold = settings.low_stock_threshold

    def select(
        self,
        product_id: str,
        selection: Mapping[str, str],
        include_inactive: bool = False
    ) -> VariantSelectionResponse:
        """
        Apply a shopper's selection to a product.

        Args:
            product_id: Product UUID
            selection: type_id -> option_id
            include_inactive: Keep inactive variants in view

        Returns:
            VariantSelectionResponse
        """
        variants = self.variant_service.get_variants(product_id)

        response = build_selection_response(
            variants,
            selection,
            include_inactive=include_inactive,
            low_stock_threshold=self.low_stock_threshold,
        )

        logger.info(
            "variant_selection_applied",
            product_id=product_id,
            status=response.status.value,
            variant_id=response.variant.id if response.variant else None
        )

        return response


# Singleton instance for convenience
_variant_selection_service: Optional[VariantSelectionService] = None

def get_variant_selection_service() -> VariantSelectionService:
    """Get or create VariantSelectionService instance."""
    global _variant_selection_service
    if _variant_selection_service is None:
        _variant_selection_service = VariantSelectionService()
    return _variant_selection_service
