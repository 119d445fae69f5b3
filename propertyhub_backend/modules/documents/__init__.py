"""Document module: document metadata model, form shapes and transformers."""

from .schemas import (
    DOCUMENT_TYPES,
    Document,
    DocumentCreate,
    DocumentFileInfo,
    DocumentFormData,
    DocumentType,
)

__all__ = [
    "Document",
    "DocumentCreate",
    "DocumentFileInfo",
    "DocumentFormData",
    "DocumentType",
    "DOCUMENT_TYPES",
]
