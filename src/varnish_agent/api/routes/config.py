"""Rendered configuration API endpoints.

Provides:
- GET /vcl    - VCL text rendered by the engine
- GET /config - Engine's active low-level configuration, verbatim
"""

from __future__ import annotations

__all__ = ["router"]

from typing import Any

from fastapi import APIRouter, Depends

from varnish_agent.api.deps import ExporterDep
from varnish_agent.api.guard import require_credentials
from varnish_agent.api.schemas import VclResponse

router = APIRouter(dependencies=[Depends(require_credentials)])


@router.get("/vcl", response_model=VclResponse)
async def get_vcl(exporter: ExporterDep) -> VclResponse:
    """Return the current VCL.

    Raises:
        UpstreamError: 502 if the engine fails to render.
    """
    return VclResponse(vcl=await exporter.render())


@router.get("/config", response_model=None)
async def get_config(exporter: ExporterDep) -> dict[str, Any]:
    """Return the engine's active configuration snapshot."""
    return exporter.snapshot()
