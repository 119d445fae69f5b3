"""Common schemas shared across all modules."""

from datetime import datetime, timezone
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class BaseResponse(BaseModel, Generic[T]):
    """Base response schema for API responses."""

    success: bool = Field(
        default=True, description="Whether the request was successful"
    )
    message: str | None = Field(default=None, description="Response message")
    data: T | None = Field(default=None, description="Response data")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Response timestamp",
    )


class ErrorResponse(BaseModel):
    """Body of a call that could not be completed."""

    code: str = Field(description="Short error code, e.g. invalid-argument")
    message: str = Field(description="Human readable message")
    transaction_id: str | None = Field(
        default=None, description="Request correlation id"
    )
