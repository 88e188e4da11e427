"""
Attribute catalog schemas.

Attribute types are the axes a product varies along (Color, Size) and
attribute options are the values on each axis (Red, M). Both are
identified by opaque ids; display fields never take part in identity.
"""

from pydantic import ConfigDict, Field, field_validator
from typing import Optional
from enum import Enum

from models.base import BaseSchema


class AttributeStatus(str, Enum):
    """Catalog entry visibility."""
    ACTIVE = "active"
    INACTIVE = "inactive"


class AttributeType(BaseSchema):
    """One axis of variation, e.g. Color."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Attribute type id")
    name: str = Field(
        ...,
        min_length=1,
        description="Machine key",
        examples=["color", "size"]
    )
    display_name: str = Field(..., min_length=1, description="Label shown to shoppers")
    sort_order: int = Field(0, description="Position in selectors")
    status: AttributeStatus = Field(AttributeStatus.ACTIVE)

    @field_validator("name")
    @classmethod
    def name_lowercase(cls, v: str) -> str:
        """Machine keys are stored lower-case."""
        return v.lower()


class AttributeOption(BaseSchema):
    """One value along an attribute type, e.g. Red."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Attribute option id")
    type_id: str = Field(..., min_length=1, description="Owning attribute type id")
    value: str = Field(
        ...,
        min_length=1,
        description="Machine key",
        examples=["red", "xl"]
    )
    display_value: str = Field(..., min_length=1, description="Label shown to shoppers")
    hex_color: Optional[str] = Field(
        None,
        pattern=r"^#[0-9A-Fa-f]{6}$",
        description="Swatch color for color-like types"
    )
    sort_order: int = Field(0)
    status: AttributeStatus = Field(AttributeStatus.ACTIVE)

    @field_validator("value")
    @classmethod
    def value_lowercase(cls, v: str) -> str:
        """Machine keys are stored lower-case."""
        return v.lower()


class AttributeTypeWithOptions(AttributeType):
    """Attribute type with its options, as served by the catalog."""

    options: list[AttributeOption] = Field(default_factory=list)


class AttributeGridEntry(BaseSchema):
    """
    An active attribute type and the options the operator picked for it.

    The combination generator expands a list of these into variants.
    """

    attribute_type: AttributeType
    options: list[AttributeOption] = Field(default_factory=list)
