"""API schemas (Pydantic models) for request/response validation."""

from __future__ import annotations

from varnish_agent.api.schemas.config import VclResponse
from varnish_agent.api.schemas.directors import DirectorListResponse
from varnish_agent.api.schemas.errors import (
    ErrorDetail,
    ErrorResponse,
    ValidationErrorItem,
)

__all__ = [
    # Directors
    "DirectorListResponse",
    # Config
    "VclResponse",
    # Errors
    "ErrorDetail",
    "ErrorResponse",
    "ValidationErrorItem",
]
