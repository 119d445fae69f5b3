"""Document schemas."""

import enum
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ...core.formatting import parse_file_size
from ...core.utils import coerce_enum, parse_int, parse_timestamp


class DocumentType(str, enum.Enum):
    """Document categories."""

    DEED = "deed"
    CONTRACT = "contract"
    INSPECTION = "inspection"
    INSURANCE = "insurance"
    TAX = "tax"
    OTHER = "other"


class DocumentBase(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        validate_default=True,
    )


class Document(DocumentBase):
    """Document metadata as held by the application."""

    id: str | None = None
    name: str | None = None
    description: str | None = None
    type: DocumentType = DocumentType.OTHER
    property_id: str | None = None
    owner_id: str | None = None
    upload_date: datetime | None = None
    file_size: int | None = None  # bytes
    mime_type: str | None = None
    drive_file_id: str | None = None
    drive_url: str | None = None
    uploaded_by: str | None = None
    is_active: bool | None = None
    tags: list[str] = Field(default_factory=list)
    version: int = 1
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("type", mode="before")
    @classmethod
    def coerce_type(cls, value):
        return coerce_enum(DocumentType, value, DocumentType.OTHER)

    @field_validator("tags", mode="before")
    @classmethod
    def default_tags(cls, value):
        return value or []

    @field_validator("version", mode="before")
    @classmethod
    def default_version(cls, value):
        return parse_int(value) or 1

    @field_validator("file_size", mode="before")
    @classmethod
    def widen_file_size(cls, value):
        # Older records carry a display string such as "2.5 MB"
        if isinstance(value, str):
            return int(parse_file_size(value))
        return parse_int(value)

    @field_validator("upload_date", "created_at", "updated_at", mode="before")
    @classmethod
    def widen_timestamps(cls, value):
        return parse_timestamp(value)


class DocumentCreate(DocumentBase):
    """Write payload for a new document."""

    name: str | None = None
    description: str | None = None
    type: str | None = None
    property_id: str | None = None
    owner_id: str | None = None
    upload_date: datetime | None = None
    file_size: int | None = None
    mime_type: str | None = None
    drive_file_id: str | None = None
    drive_url: str | None = None
    uploaded_by: str | None = None
    is_active: bool | None = None
    tags: list[str] = Field(default_factory=list)
    version: int = 1


class DocumentFormData(DocumentBase):
    """Values bound to the document form."""

    name: str = ""
    description: str = ""
    type: str = ""
    property_id: str = ""
    tags: list[str] = Field(default_factory=list)


class DocumentFileInfo(DocumentBase):
    """Upload metadata that accompanies a submitted document form."""

    file_size: int | None = None
    mime_type: str | None = None
    drive_file_id: str | None = None
    drive_url: str | None = None
    uploaded_by: str | None = None
    owner_id: str | None = None


DOCUMENT_TYPES: list[str] = [document_type.value for document_type in DocumentType]
