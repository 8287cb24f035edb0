"""Configuration engine protocol.

The engine owns the authoritative director list, renders VCL from it and
applies changes to the running cache. The agent consumes exactly these
four operations and never caches their results.

Failure contract: list/save/render raise UpstreamError (any other exception
is wrapped into UpstreamError by the caller). config_snapshot has no error
path.
"""

from __future__ import annotations

__all__ = ["ConfigEngine"]

from typing import Any, Protocol, runtime_checkable

from varnish_agent.registry.models import Director


@runtime_checkable
class ConfigEngine(Protocol):
    """Protocol for director storage and configuration rendering backends."""

    async def list_directors(self) -> list[Director]:
        """Return the complete current director collection."""
        ...

    async def save(self, directors: list[Director]) -> None:
        """Replace the whole director collection."""
        ...

    async def render_config(self) -> str:
        """Render the current VCL text."""
        ...

    def config_snapshot(self) -> dict[str, Any]:
        """Return the currently active low-level configuration."""
        ...
