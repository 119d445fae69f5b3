"""Conversions between stored property records, ``Property`` and form data."""

from typing import Any

from ...core.utils import clean_text, parse_float, parse_int, to_form_string
from .schemas import Property, PropertyCreate, PropertyFormData


def from_store(record: dict[str, Any]) -> Property:
    """Widen a stored property record; missing ``features`` become ``[]``."""
    return Property.model_validate(record)


def to_store(prop: Property | PropertyCreate) -> dict[str, Any]:
    """Narrow a property back to its JSON-safe stored shape; ``isActive`` defaults to true."""
    record = prop.model_dump(mode="json", by_alias=True, exclude_none=True)
    record.setdefault("isActive", True)
    record.setdefault("features", [])
    return record


def from_form(form: PropertyFormData) -> PropertyCreate:
    """Build a write payload from submitted form values.

    Numbers that fail to parse become None and are reported by validation.
    """
    return PropertyCreate(
        address=clean_text(form.address),
        type=clean_text(form.type),
        owner_id=clean_text(form.owner_id),
        tenant_id=clean_text(form.tenant_id),
        image_url=clean_text(form.image_url),
        purchase_date=clean_text(form.purchase_date),
        value=parse_float(form.value),
        description=clean_text(form.description),
        bedrooms=parse_int(form.bedrooms),
        bathrooms=parse_int(form.bathrooms),
        square_meters=parse_float(form.square_meters),
        year_built=parse_int(form.year_built),
        features=[f.strip() for f in form.features if f and f.strip()],
    )


def to_form(prop: Property) -> PropertyFormData:
    """Populate the property form."""
    return PropertyFormData(
        address=prop.address or "",
        type=prop.type,
        owner_id=prop.owner_id or "",
        tenant_id=prop.tenant_id or "",
        image_url=prop.image_url or "",
        purchase_date=prop.purchase_date or "",
        value=to_form_string(prop.value),
        description=prop.description or "",
        bedrooms=to_form_string(prop.bedrooms),
        bathrooms=to_form_string(prop.bathrooms),
        square_meters=to_form_string(prop.square_meters),
        year_built=to_form_string(prop.year_built),
        features=list(prop.features),
    )


def properties_from_store(records: list[dict[str, Any]]) -> list[Property]:
    """Convert a batch of stored property records."""
    return [from_store(record) for record in records]
