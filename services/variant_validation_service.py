"""
Submission-time validation of a product's variant list.

Runs before anything is written, so a rejected submission never leaves
a partially saved product. Checks, in order:
    1. At least one variant
    2. Every variant has a positive price and a SKU
    3. SKUs are unique (case-insensitive)
    4. Attribute combinations are unique (canonical signature)
"""

from typing import Sequence
import structlog

from models.variant import Variant
from exceptions import (
    VariantsRequiredError,
    InvalidVariantError,
    DuplicateSkuError,
    DuplicateCombinationError,
)
from utils.signature import variant_signature

logger = structlog.get_logger(__name__)


def find_duplicate_skus(variants: Sequence[Variant]) -> dict[str, list[int]]:
    """Upper-cased SKU -> indexes, for SKUs used more than once."""
    seen: dict[str, list[int]] = {}
    for index, variant in enumerate(variants):
        sku = (variant.sku or "").strip().upper()
        if sku:
            seen.setdefault(sku, []).append(index)
    return {sku: indexes for sku, indexes in seen.items() if len(indexes) > 1}


def find_duplicate_combinations(variants: Sequence[Variant]) -> dict[str, list[int]]:
    """Signature -> indexes, for combinations used more than once."""
    seen: dict[str, list[int]] = {}
    for index, variant in enumerate(variants):
        signature = variant_signature(variant)
        # Rows without any complete option have no combination to clash on
        if signature:
            seen.setdefault(signature, []).append(index)
    return {sig: indexes for sig, indexes in seen.items() if len(indexes) > 1}


def validate_variants(variants: Sequence[Variant]) -> None:
    """
    Validate the final variant list before persistence.

    Args:
        variants: Variants as submitted by the operator

    Raises:
        VariantsRequiredError: If the list is empty
        InvalidVariantError: If a variant lacks a positive price or a SKU
        DuplicateSkuError: If two variants share a SKU
        DuplicateCombinationError: If two variants share a combination
    """
    try:
        if not variants:
            raise VariantsRequiredError()

        for index, variant in enumerate(variants):
            if variant.price is None or variant.price <= 0:
                raise InvalidVariantError(index, "price", "All variants need a valid price")
            if not (variant.sku or "").strip():
                raise InvalidVariantError(index, "sku", "All variants need a SKU")

        duplicate_skus = find_duplicate_skus(variants)
        if duplicate_skus:
            sku, indexes = next(iter(duplicate_skus.items()))
            raise DuplicateSkuError(sku, indexes)

        duplicate_combinations = find_duplicate_combinations(variants)
        if duplicate_combinations:
            signature, indexes = next(iter(duplicate_combinations.items()))
            raise DuplicateCombinationError(signature, indexes)

    except (VariantsRequiredError, InvalidVariantError, DuplicateSkuError, DuplicateCombinationError) as e:
        logger.warning(
            "variant_submission_rejected",
            code=e.code,
            details=e.details,
        )
        raise

    logger.debug("variant_submission_valid", count=len(variants))
