"""Standard API response schemas for consistent error handling."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field, field_serializer

T = TypeVar("T")


class SuccessResponse(BaseModel, Generic[T]):
    """Standard success response format."""

    success: bool = Field(True, description="Always true for success responses")
    message: str = Field(
        "Operation completed successfully", description="Success message"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC), description="Response timestamp"
    )
    data: T = Field(..., description="Response data")

    @field_serializer("timestamp")
    def serialize_timestamp(self, value: datetime) -> str:
        """Serialize datetime to ISO format string."""
        return value.isoformat()


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str = Field(..., description="Human-readable error message")
    error_code: str = Field(..., description="Machine-readable error code")
    details: dict[str, Any] | None = Field(None, description="Additional error details")
