"""
Combination generator: expands chosen attribute options into variants.

Given the options an operator ticked for each attribute type, builds
the cartesian product of option tuples, dedupes them by canonical
signature and merges the result against the operator's current variant
list so manual edits (price, stock, SKU, images) survive regeneration.

Pure over its inputs: no I/O, inputs are never mutated.
"""

import itertools
import math
import random
from decimal import Decimal
from typing import Callable, Iterable, Mapping, Optional, Sequence
import structlog

from models.attribute import AttributeType, AttributeOption, AttributeGridEntry
from models.variant import (
    DISPLAY_NAME_MAX_LENGTH,
    SKU_MAX_LENGTH,
    Variant,
    VariantOption,
    VariantDefaults,
)
from exceptions import NoActiveAttributeTypesError
from utils.signature import signature_from_pairs, variant_signature

logger = structlog.get_logger(__name__)

Combo = tuple[tuple[AttributeType, AttributeOption], ...]

# Placeholder ranges used by the admin editor's "fill random data"
PLACEHOLDER_PRICE_RANGE = (50, 1000)
PLACEHOLDER_DISCOUNT_RANGE = (0, 50)
PLACEHOLDER_STOCK_RANGE = (0, 100)


# ===================
# GRID HELPERS
# ===================

def build_option_grid(
    attribute_types: Iterable[AttributeType],
    options_by_type: Mapping[str, Sequence[AttributeOption]],
    selected_option_ids: Mapping[str, Iterable[str]],
) -> list[AttributeGridEntry]:
    """
    Build the option grid from the catalog and the operator's ticks.

    Types keep catalog order and options keep catalog order within a
    type. Types with nothing ticked are left out.

    Args:
        attribute_types: Catalog attribute types, in display order
        options_by_type: type_id -> catalog options, in display order
        selected_option_ids: type_id -> ticked option ids

    Returns:
        One grid entry per type with at least one ticked option
    """
    grid = []
    for attribute_type in attribute_types:
        chosen = set(selected_option_ids.get(attribute_type.id) or ())
        if not chosen:
            continue
        options = [
            option for option in options_by_type.get(attribute_type.id, ())
            if option.id in chosen
        ]
        if options:
            grid.append(AttributeGridEntry(attribute_type=attribute_type, options=options))
    return grid


def count_combinations(grid: Iterable[AttributeGridEntry]) -> int:
    """Number of variants the grid expands to (0 when nothing is active)."""
    sizes = [len(entry.options) for entry in grid if entry.options]
    if not sizes:
        return 0
    return math.prod(sizes)


def derive_sku(combo: Combo) -> str:
    """Default SKU: option machine values, upper-cased, hyphen-joined."""
    sku = "-".join(option.value.upper() for _, option in combo)
    return sku[:SKU_MAX_LENGTH].rstrip("-")


def derive_display_name(combo: Combo) -> str:
    """Default display name: option labels joined with " / "."""
    name = " / ".join(option.display_value for _, option in combo)
    return name[:DISPLAY_NAME_MAX_LENGTH].rstrip(" /")


def placeholder_defaults(rng: Optional[random.Random] = None) -> VariantDefaults:
    """Random placeholder price/discount/stock for a new variant."""
    rng = rng or random.Random()
    return VariantDefaults(
        price=Decimal(rng.randint(*PLACEHOLDER_PRICE_RANGE)),
        discount=Decimal(rng.randint(*PLACEHOLDER_DISCOUNT_RANGE)),
        stock=rng.randint(*PLACEHOLDER_STOCK_RANGE),
    )


# ===================
# GENERATION
# ===================

def _combo_signature(combo: Combo) -> str:
    return signature_from_pairs(
        (attribute_type.id, option.id) for attribute_type, option in combo
    )


def _new_variant(combo: Combo, options: list[VariantOption], defaults: VariantDefaults) -> Variant:
    return Variant(
        sku=derive_sku(combo),
        display_name=derive_display_name(combo),
        price=defaults.price,
        discount=defaults.discount,
        stock=defaults.stock,
        images=[],
        options=options,
    )


def _refresh_variant(
    existing: Variant,
    combo: Combo,
    options: list[VariantOption],
    defaults: Callable[[], VariantDefaults],
) -> Variant:
    """Carry an existing variant forward with fresh option metadata."""
    update = {"options": options}
    if not existing.sku:
        update["sku"] = derive_sku(combo)
    if not existing.display_name:
        update["display_name"] = derive_display_name(combo)
    if existing.price is None:
        update["price"] = defaults().price
    return existing.model_copy(deep=True, update=update)


def generate_variants(
    grid: Sequence[AttributeGridEntry],
    existing: Sequence[Variant] = (),
    defaults: Optional[VariantDefaults] = None,
    defaults_factory: Optional[Callable[[], VariantDefaults]] = None,
) -> list[Variant]:
    """
    Expand the option grid into the full variant list.

    Existing variants whose combination is still in the grid are reused
    with their id, sku, price, discount, stock, status and images intact;
    only their option snapshot is refreshed. Existing variants whose
    combination left the grid are dropped.

    Args:
        grid: Active attribute types with their chosen options
        existing: Operator's current variants (may be empty)
        defaults: Values for new variants
        defaults_factory: Called once per new variant instead of defaults

    Returns:
        Variants in cartesian order of the grid

    Raises:
        NoActiveAttributeTypesError: If no type has a chosen option
    """
    active = [entry for entry in grid if entry.options]
    if not active:
        raise NoActiveAttributeTypesError()

    if defaults_factory is None:
        fixed = defaults or VariantDefaults()
        defaults_factory = lambda: fixed

    axes = [
        [(entry.attribute_type, option) for option in entry.options]
        for entry in active
    ]

    candidates: dict[str, Combo] = {}
    for combo in itertools.product(*axes):
        signature = _combo_signature(combo)
        if signature:
            candidates[signature] = combo

    existing_by_signature: dict[str, Variant] = {}
    for variant in existing:
        signature = variant_signature(variant)
        if signature and signature not in existing_by_signature:
            existing_by_signature[signature] = variant

    variants = []
    reused = 0
    for signature, combo in candidates.items():
        options = [VariantOption.from_catalog(t, o) for t, o in combo]
        previous = existing_by_signature.get(signature)
        if previous is not None:
            variants.append(_refresh_variant(previous, combo, options, defaults_factory))
            reused += 1
        else:
            variants.append(_new_variant(combo, options, defaults_factory()))

    logger.info(
        "variants_generated",
        active_types=len(active),
        total=len(variants),
        reused=reused,
        created=len(variants) - reused,
        dropped=len(existing) - reused,
    )

    return variants
