"""Error response schemas for API documentation.

The actual error handling is in api/errors.py.
"""

from __future__ import annotations

__all__ = [
    "ErrorDetail",
    "ErrorResponse",
    "ValidationErrorItem",
]

from typing import Any

from pydantic import BaseModel, Field


class ValidationErrorItem(BaseModel):
    """Single validation error from Pydantic."""

    loc: list[str | int] = Field(description="Location of the error in the request")
    msg: str = Field(description="Human-readable error message")
    type: str = Field(description="Error type identifier")


class ErrorDetail(BaseModel):
    """Structured error detail.

    Attributes:
        code: Error code for programmatic handling (e.g., "DIRECTOR_NOT_FOUND").
        message: Human-readable error message.
        details: Optional contextual details (varies by error type).
        validation_errors: Field-level errors for INVALID_INPUT responses.
    """

    code: str = Field(
        description="Error code for programmatic handling",
        examples=["DIRECTOR_NOT_FOUND", "DIRECTOR_EXISTS", "AUTH_REQUIRED"],
    )
    message: str = Field(
        description="Human-readable error message",
        examples=["Director 'b1' not found"],
    )
    details: dict[str, Any] | None = Field(
        default=None,
        description="Optional contextual details",
        examples=[{"name": "b1"}],
    )
    validation_errors: list[ValidationErrorItem] | None = Field(
        default=None,
        description="Request validation errors",
    )


class ErrorResponse(BaseModel):
    """Full error response wrapper."""

    detail: ErrorDetail
