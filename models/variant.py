"""
Product variant schemas.

A variant is one sellable combination of attribute options with its own
price, stock, SKU and images. Each variant carries a snapshot of the
options it was built from so it stays self-describing when the catalog
is relabeled later.
"""

from pydantic import Field, field_validator
from typing import Optional
from decimal import Decimal
from enum import Enum
from uuid import uuid4

from models.base import BaseSchema
from models.attribute import AttributeType, AttributeOption

TEMP_ID_PREFIX = "tmp_"
SKU_MAX_LENGTH = 100
DISPLAY_NAME_MAX_LENGTH = 200

# type_id -> option_id, at most one option per attribute type
AttributeSelection = dict[str, str]


def new_temp_id() -> str:
    """Identity for a variant that has not been persisted yet."""
    return f"{TEMP_ID_PREFIX}{uuid4().hex}"


class VariantStatus(str, Enum):
    """Variant visibility on the storefront."""
    ACTIVE = "active"
    INACTIVE = "inactive"


class VariantOption(BaseSchema):
    """
    Denormalized (type, option) pair embedded in a variant.

    type_id/option_id can be missing on rows an operator added by hand;
    such pairs are ignored by signatures and matching.
    """

    type_id: Optional[str] = None
    type_name: str = ""
    type_display_name: str = ""
    option_id: Optional[str] = None
    value: str = ""
    display_value: str = ""
    hex_color: Optional[str] = None

    @classmethod
    def from_catalog(
        cls,
        attribute_type: AttributeType,
        option: AttributeOption
    ) -> "VariantOption":
        """Snapshot catalog entries into an embedded option."""
        return cls(
            type_id=attribute_type.id,
            type_name=attribute_type.name,
            type_display_name=attribute_type.display_name,
            option_id=option.id,
            value=option.value,
            display_value=option.display_value,
            hex_color=option.hex_color,
        )


class VariantImage(BaseSchema):
    """Image attached to a variant."""

    path: str = Field(..., min_length=1)
    is_primary: bool = False
    sort_order: int = 0
    alt_text: Optional[str] = Field(None, max_length=200)


class Variant(BaseSchema):
    """
    One sellable attribute combination.

    New variants get a temporary id (tmp_...) until persistence assigns
    a real one; the id is kept across regeneration and edits.
    """

    id: str = Field(default_factory=new_temp_id, description="Variant id")
    sku: str = Field("", max_length=SKU_MAX_LENGTH, description="Stock keeping unit")
    display_name: str = Field("", max_length=DISPLAY_NAME_MAX_LENGTH)
    price: Optional[Decimal] = Field(None, ge=0, description="Unit price")
    discount: Decimal = Field(Decimal("0"), ge=0, le=100, description="Discount percentage")
    stock: int = Field(0, ge=0)
    status: VariantStatus = Field(VariantStatus.ACTIVE)
    images: list[VariantImage] = Field(default_factory=list)
    options: list[VariantOption] = Field(default_factory=list)

    @field_validator("sku")
    @classmethod
    def sku_uppercase(cls, v: str) -> str:
        """SKU must be uppercase and trimmed."""
        return v.upper().strip()

    @property
    def is_persisted(self) -> bool:
        """True once the variant has a database id."""
        return not self.id.startswith(TEMP_ID_PREFIX)

    @property
    def is_active(self) -> bool:
        return self.status == VariantStatus.ACTIVE

    @property
    def is_in_stock(self) -> bool:
        return self.stock > 0


class VariantDefaults(BaseSchema):
    """Values given to newly generated variants."""

    price: Optional[Decimal] = Field(None, ge=0)
    discount: Decimal = Field(Decimal("0"), ge=0, le=100)
    stock: int = Field(0, ge=0)


# ===================
# REQUESTS / RESPONSES
# ===================

class GenerateVariantsRequest(BaseSchema):
    """
    Regenerate a product's variant grid.

    selected_option_ids maps attribute type id to the option ids the
    operator ticked. existing_variants is the operator's current list,
    whose manual edits are carried over.
    """

    selected_option_ids: dict[str, list[str]] = Field(default_factory=dict)
    existing_variants: list[Variant] = Field(default_factory=list)
    defaults: Optional[VariantDefaults] = None
    use_placeholder_defaults: bool = Field(
        False,
        description="Fill new variants with random placeholder price/discount/stock"
    )


class SaveVariantsRequest(BaseSchema):
    """Final variant list submitted by the operator."""

    variants: list[Variant]


class VariantListResponse(BaseSchema):
    """Variants of one product."""

    data: list[Variant]
    total: int
