"""
Display aggregation for the product page.

Derives price range, stock state and the primary image from the variants
in view: the resolved variant when there is one, otherwise the variants
still matching the shopper's partial selection.
"""

from typing import Optional, Sequence

from models.variant import Variant, VariantImage
from models.variant_selection import PriceRange, VariantDisplaySummary


def price_range(variants: Sequence[Variant]) -> Optional[PriceRange]:
    """Min/max over variants with a positive price, None if none are priced."""
    prices = [v.price for v in variants if v.price is not None and v.price > 0]
    if not prices:
        return None
    return PriceRange(min=min(prices), max=max(prices))


def primary_image(variants: Sequence[Variant]) -> Optional[VariantImage]:
    """First variant's flagged primary image, else its first image."""
    for variant in variants:
        if not variant.images:
            continue
        flagged = next((image for image in variant.images if image.is_primary), None)
        return flagged or variant.images[0]
    return None


def summarize_variants(
    variants: Sequence[Variant],
    resolved: Optional[Variant] = None,
    low_stock_threshold: int = 10,
) -> VariantDisplaySummary:
    """
    Build the display summary.

    Args:
        variants: Variants in view (already narrowed by the caller)
        resolved: Variant the selection resolved to, if any
        low_stock_threshold: Stock at or below this is flagged low

    Returns:
        VariantDisplaySummary
    """
    scope = [resolved] if resolved is not None else list(variants)
    sellable = [v for v in scope if v.is_active]

    total_stock = sum(v.stock for v in sellable)
    in_stock = any(v.is_in_stock for v in sellable)

    return VariantDisplaySummary(
        price_range=price_range(scope),
        in_stock=in_stock,
        total_stock=total_stock,
        low_stock=in_stock and total_stock <= low_stock_threshold,
        primary_image=primary_image(scope) or primary_image(variants),
    )
