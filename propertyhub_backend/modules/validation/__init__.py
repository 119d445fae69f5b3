"""Server-side validation of records before they are written."""

from .routers import router
from .schemas import (
    FieldError,
    Operation,
    ValidationRequest,
    ValidationResponse,
    ValidationResult,
)
from .services import describe_schemas, validate_data

__all__ = [
    "router",
    "FieldError",
    "Operation",
    "ValidationRequest",
    "ValidationResponse",
    "ValidationResult",
    "describe_schemas",
    "validate_data",
]
