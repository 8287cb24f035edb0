"""Rendered configuration API schemas."""

from __future__ import annotations

__all__ = ["VclResponse"]

from pydantic import BaseModel


class VclResponse(BaseModel):
    """Response model for GET /vcl."""

    vcl: str
