"""Common schemas and utilities shared across modules."""

from .schemas import BaseResponse, ErrorResponse

__all__ = [
    "BaseResponse",
    "ErrorResponse",
]
