"""Property module: property model, form shapes and transformers."""

from .schemas import (
    PROPERTY_TYPES,
    Property,
    PropertyCreate,
    PropertyFormData,
    PropertyType,
)

__all__ = [
    "Property",
    "PropertyCreate",
    "PropertyFormData",
    "PropertyType",
    "PROPERTY_TYPES",
]
