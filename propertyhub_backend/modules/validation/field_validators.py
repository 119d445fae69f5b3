"""Field-level validation rules for users, properties and documents.

Each ``validate_*_fields`` function is pure: it inspects an input variant
and returns the list of problems found. Required fields are only enforced
on create; every other rule applies whenever the field is present.
"""

import math
import re
from collections.abc import Callable
from datetime import date, datetime, timezone
from typing import Any

from pydantic import HttpUrl, TypeAdapter, ValidationError

from ...config import settings
from ...core.formatting import format_file_size
from ...core.utils import utc_now
from ..documents.schemas import DOCUMENT_TYPES
from ..properties.schemas import PROPERTY_TYPES
from ..users.schemas import USER_ROLES
from .schemas import DocumentInput, FieldError, Operation, PropertyInput, UserInput

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^\(\d{3}\) \d{3}-\d{4}$")
HTTP_URL = TypeAdapter(HttpUrl)

MAX_ROOMS = 20
MAX_SQUARE_METERS = 10000
MIN_YEAR_BUILT = 1800
MAX_DESCRIPTION_LENGTH = 500

Clock = Callable[[], datetime]


# ----- Primitive checks -----


def is_present(value: Any) -> bool:
    """A value counts as present unless it is None or a blank string."""
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def is_number(value: Any) -> bool:
    """Real numbers only; booleans and NaN/inf are rejected."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def is_whole_number(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_valid_email(email: Any) -> bool:
    return isinstance(email, str) and EMAIL_PATTERN.match(email) is not None


def is_valid_phone(phone: Any) -> bool:
    return isinstance(phone, str) and PHONE_PATTERN.match(phone) is not None


def is_string_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def parse_date_value(value: Any) -> date | datetime | None:
    """Parse ISO dates (``YYYY-MM-DD``) and datetimes; None when unparsable."""
    if isinstance(value, (date, datetime)):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None


def is_in_future(value: date | datetime, now: datetime) -> bool:
    """Compare against ``now``; plain dates compare against today's date."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        return value > now
    return value > now.date()


def _check_required(
    entity: Any, required: list[tuple[str, str, str]]
) -> list[FieldError]:
    errors = []
    for attribute, field, message in required:
        if not is_present(getattr(entity, attribute)):
            errors.append(FieldError(field=field, code="required", message=message))
    return errors


def _check_length(
    field: str, value: Any, minimum: int, maximum: int, message: str
) -> FieldError | None:
    if not is_present(value):
        return None
    if not isinstance(value, str) or not minimum <= len(value) <= maximum:
        return FieldError(field=field, code="length", message=message)
    return None


def _check_choice(
    field: str, value: Any, allowed: list[str], message: str
) -> FieldError | None:
    if not is_present(value):
        return None
    if value not in allowed:
        return FieldError(field=field, code="invalid_choice", message=message)
    return None


def _check_description(value: Any) -> FieldError | None:
    if not is_present(value):
        return None
    if not isinstance(value, str) or len(value) > MAX_DESCRIPTION_LENGTH:
        return FieldError(
            field="description",
            code="length",
            message=f"Description must be less than {MAX_DESCRIPTION_LENGTH} characters",
        )
    return None


def _check_string_list(field: str, value: Any, label: str) -> FieldError | None:
    if value is None or is_string_list(value):
        return None
    return FieldError(
        field=field, code="invalid_type", message=f"{label} must be a list of strings"
    )


def _check_reference(field: str, value: Any, label: str) -> FieldError | None:
    if not is_present(value) or isinstance(value, str):
        return None
    return FieldError(
        field=field, code="invalid_type", message=f"{label} must be a string"
    )


def _collect(*errors: FieldError | None) -> list[FieldError]:
    return [error for error in errors if error is not None]


# ----- Users -----


def validate_user_fields(entity: UserInput, operation: Operation) -> list[FieldError]:
    """Field rules for user records."""
    errors: list[FieldError] = []

    if operation == Operation.CREATE:
        errors += _check_required(
            entity,
            [
                ("email", "email", "Email is required"),
                ("name", "name", "Name is required"),
                ("role", "role", "Role is required"),
            ],
        )

    if is_present(entity.email) and not is_valid_email(entity.email):
        errors.append(
            FieldError(field="email", code="invalid_format", message="Invalid email format")
        )

    errors += _collect(
        _check_choice(
            "role",
            entity.role,
            USER_ROLES,
            "Invalid role. Must be admin, owner, or tenant",
        ),
        _check_length(
            "name", entity.name, 2, 100, "Name must be between 2 and 100 characters"
        ),
    )

    if is_present(entity.phone) and not is_valid_phone(entity.phone):
        errors.append(
            FieldError(
                field="phone",
                code="invalid_format",
                message="Phone must be in format (XXX) XXX-XXXX",
            )
        )

    if entity.is_active is not None and not isinstance(entity.is_active, bool):
        errors.append(
            FieldError(
                field="isActive",
                code="invalid_type",
                message="Active flag must be true or false",
            )
        )

    return errors


# ----- Properties -----


def _check_purchase_date(value: Any, clock: Clock) -> FieldError | None:
    if not is_present(value):
        return None
    parsed = parse_date_value(value)
    if parsed is None:
        return FieldError(
            field="purchaseDate",
            code="invalid_format",
            message="Invalid purchase date format",
        )
    if is_in_future(parsed, clock()):
        return FieldError(
            field="purchaseDate",
            code="future_date",
            message="Purchase date cannot be in the future",
        )
    return None


def _check_rooms(field: str, value: Any, label: str) -> FieldError | None:
    if value is None:
        return None
    if not is_whole_number(value) or not 0 <= value <= MAX_ROOMS:
        return FieldError(
            field=field,
            code="out_of_range",
            message=f"{label} must be a whole number between 0 and {MAX_ROOMS}",
        )
    return None


def _check_square_meters(value: Any) -> FieldError | None:
    if value is None:
        return None
    if not is_number(value) or not 0 < value <= MAX_SQUARE_METERS:
        return FieldError(
            field="squareMeters",
            code="out_of_range",
            message=(
                "Square meters must be greater than 0 and at most "
                f"{MAX_SQUARE_METERS}"
            ),
        )
    return None


def _check_year_built(value: Any, clock: Clock) -> FieldError | None:
    if value is None:
        return None
    current_year = clock().year
    if not is_whole_number(value) or not MIN_YEAR_BUILT <= value <= current_year:
        return FieldError(
            field="yearBuilt",
            code="out_of_range",
            message=f"Year built must be between {MIN_YEAR_BUILT} and {current_year}",
        )
    return None


def _check_image_url(value: Any) -> FieldError | None:
    if not is_present(value):
        return None
    try:
        HTTP_URL.validate_python(value)
    except ValidationError:
        return FieldError(
            field="imageUrl",
            code="invalid_format",
            message="Image URL must be a valid http(s) URL",
        )
    return None


def validate_property_fields(
    entity: PropertyInput, operation: Operation, clock: Clock = utc_now
) -> list[FieldError]:
    """Field rules for property records."""
    errors: list[FieldError] = []

    if operation == Operation.CREATE:
        errors += _check_required(
            entity,
            [
                ("address", "address", "Address is required"),
                ("type", "type", "Property type is required"),
                ("owner_id", "ownerId", "Owner ID is required"),
                ("value", "value", "Property value is required"),
            ],
        )

    errors += _collect(
        _check_length(
            "address",
            entity.address,
            5,
            200,
            "Address must be between 5 and 200 characters",
        ),
        _check_choice(
            "type",
            entity.type,
            PROPERTY_TYPES,
            "Property type must be residential or commercial",
        ),
    )

    if is_present(entity.value) and not (is_number(entity.value) and entity.value > 0):
        errors.append(
            FieldError(
                field="value",
                code="not_positive",
                message="Property value must be a positive number",
            )
        )

    errors += _collect(
        _check_reference("ownerId", entity.owner_id, "Owner ID"),
        _check_reference("tenantId", entity.tenant_id, "Tenant ID"),
        _check_purchase_date(entity.purchase_date, clock),
        _check_description(entity.description),
        _check_image_url(entity.image_url),
        _check_rooms("bedrooms", entity.bedrooms, "Bedrooms"),
        _check_rooms("bathrooms", entity.bathrooms, "Bathrooms"),
        _check_square_meters(entity.square_meters),
        _check_year_built(entity.year_built, clock),
        _check_string_list("features", entity.features, "Features"),
    )

    return errors


# ----- Documents -----


def _check_file_size(value: Any, max_bytes: int) -> FieldError | None:
    if value is None:
        return None
    if not is_whole_number(value) or value < 0:
        return FieldError(
            field="fileSize",
            code="invalid_type",
            message="File size must be a non-negative whole number of bytes",
        )
    if value > max_bytes:
        return FieldError(
            field="fileSize",
            code="too_large",
            message=f"File size cannot exceed {format_file_size(max_bytes)}",
        )
    return None


def validate_document_fields(
    entity: DocumentInput,
    operation: Operation,
    max_file_size: int | None = None,
    allowed_mime_types: list[str] | None = None,
) -> list[FieldError]:
    """Field rules for document records."""
    if max_file_size is None:
        max_file_size = settings.max_document_size_bytes
    if allowed_mime_types is None:
        allowed_mime_types = settings.allowed_mime_types

    errors: list[FieldError] = []

    if operation == Operation.CREATE:
        errors += _check_required(
            entity,
            [
                ("name", "name", "Document name is required"),
                ("type", "type", "Document type is required"),
                ("property_id", "propertyId", "Property ID is required"),
                ("owner_id", "ownerId", "Owner ID is required"),
                ("drive_file_id", "driveFileId", "Drive file ID is required"),
            ],
        )

    errors += _collect(
        _check_length(
            "name",
            entity.name,
            1,
            100,
            "Document name must be between 1 and 100 characters",
        ),
        _check_choice(
            "type",
            entity.type,
            DOCUMENT_TYPES,
            f"Document type must be one of: {', '.join(DOCUMENT_TYPES)}",
        ),
        _check_reference("propertyId", entity.property_id, "Property ID"),
        _check_reference("ownerId", entity.owner_id, "Owner ID"),
        _check_description(entity.description),
        _check_file_size(entity.file_size, max_file_size),
        _check_string_list("tags", entity.tags, "Tags"),
    )

    if is_present(entity.mime_type) and entity.mime_type not in allowed_mime_types:
        errors.append(
            FieldError(
                field="mimeType",
                code="invalid_choice",
                message="File type is not allowed",
            )
        )

    return errors
