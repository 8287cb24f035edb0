"""Director API schemas."""

from __future__ import annotations

__all__ = ["DirectorListResponse"]

from typing import Any

from pydantic import BaseModel


class DirectorListResponse(BaseModel):
    """Response model for GET /directors (sorted by name)."""

    directors: list[dict[str, Any]]
