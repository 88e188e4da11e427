"""
Variant resolver: maps a shopper's selection onto a variant.

A variant matches a selection when every (type_id, option_id) of the
selection is among the variant's options. The selection may address
fewer attribute types than the variant has (Color picked, Size not yet).
"""

from typing import Mapping, Optional, Sequence
import structlog

from models.variant import Variant
from utils.signature import option_pairs, selection_pairs, Pair

logger = structlog.get_logger(__name__)


def matches_selection(variant_pairs: frozenset[Pair], wanted: frozenset[Pair]) -> bool:
    """True if the variant's pairs cover every wanted pair."""
    return wanted <= variant_pairs


def find_matching_variants(
    variants: Sequence[Variant],
    selection: Optional[Mapping[str, str]],
) -> list[Variant]:
    """
    All variants whose options cover the selection, in list order.

    An empty selection matches every variant.
    """
    wanted = selection_pairs(selection)
    return [
        variant for variant in variants
        if matches_selection(option_pairs(variant.options), wanted)
    ]


def attribute_type_ids(variants: Sequence[Variant]) -> set[str]:
    """Every attribute type id present across the variants."""
    return {type_id for variant in variants for type_id, _ in option_pairs(variant.options)}


def resolve_variant(
    variants: Sequence[Variant],
    selection: Optional[Mapping[str, str]],
) -> Optional[Variant]:
    """
    Resolve a selection to a single variant.

    Args:
        variants: Variants of one product
        selection: type_id -> option_id, possibly partial

    Returns:
        First matching variant in list order, or None when the selection
        is empty or no variant carries every selected pair
    """
    wanted = selection_pairs(selection)
    if not wanted:
        logger.debug("variant_resolution_skipped", reason="none_selected")
        return None

    matches = [
        variant for variant in variants
        if matches_selection(option_pairs(variant.options), wanted)
    ]

    if not matches:
        logger.debug("variant_not_resolved", selection=dict(selection or {}))
        return None

    # Several matches for a selection that addresses every attribute type
    # means two variants share a combination
    if len(matches) > 1 and attribute_type_ids(matches) <= {t for t, _ in wanted}:
        logger.warning(
            "ambiguous_variant_selection",
            selection=dict(selection or {}),
            variant_ids=[variant.id for variant in matches],
        )

    resolved = matches[0]
    logger.debug("variant_resolved", variant_id=resolved.id, sku=resolved.sku)
    return resolved
