"""Property schemas.

Same layering as users: application model, write payload and form data,
all aliased to the camelCase names used in storage.
"""

import enum
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ...core.utils import (
    coerce_enum,
    parse_float,
    parse_int,
    parse_timestamp,
    text_or_none,
)


class PropertyType(str, enum.Enum):
    """Property usage types."""

    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"


class PropertyBase(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        validate_default=True,
    )


class Property(PropertyBase):
    """Property as held by the application."""

    id: str | None = None
    address: str | None = None
    type: PropertyType = PropertyType.RESIDENTIAL
    owner_id: str | None = None
    tenant_id: str | None = None
    image_url: str | None = None
    purchase_date: str | None = None  # YYYY-MM-DD
    value: float | None = None
    description: str | None = None
    is_active: bool | None = None
    bedrooms: int | None = None
    bathrooms: int | None = None
    square_meters: float | None = None
    year_built: int | None = None
    features: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("type", mode="before")
    @classmethod
    def coerce_type(cls, value):
        return coerce_enum(PropertyType, value, PropertyType.RESIDENTIAL)

    @field_validator("features", mode="before")
    @classmethod
    def default_features(cls, value):
        return value or []

    # Malformed stored values degrade to None rather than failing the record
    @field_validator("value", "square_meters", mode="before")
    @classmethod
    def widen_decimals(cls, value):
        return parse_float(value)

    @field_validator("bedrooms", "bathrooms", "year_built", mode="before")
    @classmethod
    def widen_counts(cls, value):
        return parse_int(value)

    @field_validator("purchase_date", mode="before")
    @classmethod
    def widen_purchase_date(cls, value):
        return text_or_none(value)

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def widen_timestamps(cls, value):
        return parse_timestamp(value)


class PropertyCreate(PropertyBase):
    """Write payload for a new property."""

    address: str | None = None
    type: str | None = None
    owner_id: str | None = None
    tenant_id: str | None = None
    image_url: str | None = None
    purchase_date: str | None = None
    value: float | None = None
    description: str | None = None
    is_active: bool | None = None
    bedrooms: int | None = None
    bathrooms: int | None = None
    square_meters: float | None = None
    year_built: int | None = None
    features: list[str] = Field(default_factory=list)


class PropertyFormData(PropertyBase):
    """Values bound to the property form; numbers travel as strings."""

    address: str = ""
    type: str = ""
    owner_id: str = ""
    tenant_id: str = ""
    image_url: str = ""
    purchase_date: str = ""
    value: str = ""
    description: str = ""
    bedrooms: str = ""
    bathrooms: str = ""
    square_meters: str = ""
    year_built: str = ""
    features: list[str] = Field(default_factory=list)


PROPERTY_TYPES: list[str] = [property_type.value for property_type in PropertyType]
