"""Conversions between stored document records, ``Document`` and form data."""

from datetime import datetime
from typing import Any

from ...core.utils import clean_text, utc_now
from .schemas import Document, DocumentCreate, DocumentFileInfo, DocumentFormData


def from_store(record: dict[str, Any]) -> Document:
    """Widen a stored document record; ``tags`` default to ``[]``, ``version`` to 1."""
    return Document.model_validate(record)


def to_store(document: Document | DocumentCreate) -> dict[str, Any]:
    """Narrow a document back to its JSON-safe stored shape.

    ``isActive`` defaults to true. ``uploadDate`` is written only when set;
    new uploads get it from ``from_form``.
    """
    record = document.model_dump(mode="json", by_alias=True, exclude_none=True)
    record.setdefault("isActive", True)
    record.setdefault("tags", [])
    record.setdefault("version", 1)
    return record


def from_form(
    form: DocumentFormData, file_info: DocumentFileInfo, now: datetime | None = None
) -> DocumentCreate:
    """Combine submitted form values with the upload metadata.

    The upload is stamped with ``now`` (current UTC time by default).
    """
    return DocumentCreate(
        name=clean_text(form.name),
        description=clean_text(form.description),
        type=clean_text(form.type),
        property_id=clean_text(form.property_id),
        owner_id=file_info.owner_id,
        file_size=file_info.file_size,
        mime_type=file_info.mime_type,
        drive_file_id=file_info.drive_file_id,
        drive_url=file_info.drive_url,
        uploaded_by=file_info.uploaded_by,
        upload_date=now or utc_now(),
        tags=[t.strip() for t in form.tags if t and t.strip()],
    )


def to_form(document: Document) -> DocumentFormData:
    """Populate the document form."""
    return DocumentFormData(
        name=document.name or "",
        description=document.description or "",
        type=document.type,
        property_id=document.property_id or "",
        tags=list(document.tags),
    )


def documents_from_store(records: list[dict[str, Any]]) -> list[Document]:
    """Convert a batch of stored document records."""
    return [from_store(record) for record in records]
