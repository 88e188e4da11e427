"""
Storefront selection schemas.

Output of resolving a shopper's attribute selection: the matched variant,
per-option availability for the selectors, and the display summary.
"""

from pydantic import Field
from typing import Optional
from decimal import Decimal
from enum import Enum

from models.base import BaseSchema
from models.variant import AttributeSelection, Variant, VariantImage


class OptionState(str, Enum):
    """How a selector option should be rendered."""
    SELECTED = "selected"
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"


class SelectionStatus(str, Enum):
    """Outcome of resolving a selection."""
    NONE_SELECTED = "none_selected"
    MATCHED = "matched"
    NO_MATCH = "no_match"


class OptionAvailability(BaseSchema):
    """One option within an attribute selector."""

    option_id: str
    value: str = ""
    display_value: str = ""
    hex_color: Optional[str] = None
    state: OptionState

    @property
    def is_selectable(self) -> bool:
        return self.state != OptionState.UNAVAILABLE


class AttributeAvailability(BaseSchema):
    """Selector for one attribute type."""

    type_id: str
    name: str = ""
    display_name: str = ""
    options: list[OptionAvailability] = Field(default_factory=list)


class PriceRange(BaseSchema):
    """Lowest and highest price across a set of variants."""

    min: Decimal
    max: Decimal

    @property
    def is_single_price(self) -> bool:
        return self.min == self.max


class VariantDisplaySummary(BaseSchema):
    """Price, stock and imagery derived from the variants in view."""

    price_range: Optional[PriceRange] = None
    in_stock: bool = False
    total_stock: int = 0
    low_stock: bool = False
    primary_image: Optional[VariantImage] = None


class SelectionRequest(BaseSchema):
    """Shopper's current selection, type id -> option id."""

    selection: AttributeSelection = Field(default_factory=dict)
    include_inactive: bool = Field(False, description="Consider inactive variants too")


class VariantSelectionResponse(BaseSchema):
    """Everything the product page needs after a selection change."""

    selection: AttributeSelection
    status: SelectionStatus
    is_complete: bool = Field(..., description="Selection addresses every attribute type")
    variant: Optional[Variant] = None
    availability: list[AttributeAvailability] = Field(default_factory=list)
    display: VariantDisplaySummary = Field(
        ...,
        description="Summary of the matching variants; empty when nothing matches"
    )
