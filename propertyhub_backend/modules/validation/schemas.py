"""Validation request, result and input variant schemas.

Incoming ``data`` is untyped; it is parsed into one of the input variants
keyed by collection. Variant fields are ``Any``: wrong types are reported
in the validation result, not rejected as request errors.
"""

import enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..records.models import Collection


class Operation(str, enum.Enum):
    """Write operations that can be validated."""

    CREATE = "create"
    UPDATE = "update"


class FieldError(BaseModel):
    """A single validation problem."""

    field: str
    code: str
    message: str


class ValidationRequest(BaseModel):
    """Body of a validation call.

    Fields are optional here so that missing ones are reported as
    ``invalid-argument`` by the entry point rather than by the framework.
    """

    collection: str | None = None
    data: Any = None
    operation: str | None = None


class ValidationResponse(BaseModel):
    """Boundary form of a validation result."""

    valid: bool
    errors: list[str] | None = None


class ValidationResult(BaseModel):
    """Aggregated outcome of a validation call."""

    valid: bool
    errors: list[FieldError] = Field(default_factory=list)

    @classmethod
    def from_errors(cls, errors: list[FieldError]) -> "ValidationResult":
        return cls(valid=not errors, errors=errors)

    @property
    def messages(self) -> list[str]:
        return [error.message for error in self.errors]

    def to_response(self) -> ValidationResponse:
        """``errors`` is omitted when empty."""
        return ValidationResponse(valid=self.valid, errors=self.messages or None)


class SchemaCatalog(BaseModel):
    """What the validation endpoint accepts."""

    collections: list[str]
    operations: list[str]
    enums: dict[str, list[str]]


# ----- Input variants -----


class EntityInput(BaseModel):
    """Common base for raw input records."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    collection: ClassVar[Collection]


class UserInput(EntityInput):
    collection: ClassVar[Collection] = Collection.USERS

    email: Any = None
    name: Any = None
    role: Any = None
    phone: Any = None
    is_active: Any = None


class PropertyInput(EntityInput):
    collection: ClassVar[Collection] = Collection.PROPERTIES

    address: Any = None
    type: Any = None
    owner_id: Any = None
    tenant_id: Any = None
    value: Any = None
    purchase_date: Any = None
    description: Any = None
    image_url: Any = None
    bedrooms: Any = None
    bathrooms: Any = None
    square_meters: Any = None
    year_built: Any = None
    features: Any = None


class DocumentInput(EntityInput):
    collection: ClassVar[Collection] = Collection.DOCUMENTS

    name: Any = None
    type: Any = None
    property_id: Any = None
    owner_id: Any = None
    drive_file_id: Any = None
    description: Any = None
    file_size: Any = None
    mime_type: Any = None
    tags: Any = None


INPUT_MODELS: dict[Collection, type[EntityInput]] = {
    Collection.USERS: UserInput,
    Collection.PROPERTIES: PropertyInput,
    Collection.DOCUMENTS: DocumentInput,
}


def build_input(collection: Collection, data: dict[str, Any]) -> EntityInput:
    """Parse raw record data into the variant for ``collection``."""
    return INPUT_MODELS[collection].model_validate(data)
