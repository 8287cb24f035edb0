"""Shared dependencies for API routes.

Usage with Annotated:
    from varnish_agent.api.deps import RegistryDep

    @router.get("")
    async def list_directors(registry: RegistryDep) -> DirectorListResponse:
        ...
"""

from __future__ import annotations

__all__ = [
    # Dependency functions
    "get_assets",
    "get_exporter",
    "get_registry",
    # Type aliases for Annotated pattern
    "AssetsDep",
    "ExporterDep",
    "RegistryDep",
]

from typing import Annotated, Any, Callable

from fastapi import Depends, Request

from varnish_agent.api.assets import AssetStore
from varnish_agent.api.errors import APIError, ErrorCode
from varnish_agent.exporter import ConfigExporter
from varnish_agent.registry.gateway import RegistryGateway


def _create_state_getter(
    attr_name: str,
    type_hint: str,
    error_detail: str,
) -> Callable[[Request], Any]:
    """Create a dependency function that retrieves a value from app.state.

    Args:
        attr_name: Attribute name on app.state (e.g., "registry").
        type_hint: Type name used in the generated docstring.
        error_detail: Error message for the 503 response.

    Returns:
        A dependency function compatible with FastAPI's Depends().
    """

    def getter(request: Request) -> Any:
        value = getattr(request.app.state, attr_name, None)
        if value is None:
            raise APIError(
                status_code=503,
                code=ErrorCode.SERVICE_UNAVAILABLE,
                message=error_detail,
            )
        return value

    getter.__name__ = f"get_{attr_name}"
    getter.__doc__ = f"Get {type_hint} from app.state.\n\nRaises APIError 503 if not available."
    return getter


get_registry: Callable[[Request], RegistryGateway] = _create_state_getter(
    "registry",
    "RegistryGateway",
    "Director registry not available. Agent may still be starting.",
)

get_exporter: Callable[[Request], ConfigExporter] = _create_state_getter(
    "exporter",
    "ConfigExporter",
    "Config exporter not available. Agent may still be starting.",
)

get_assets: Callable[[Request], AssetStore] = _create_state_getter(
    "assets",
    "AssetStore",
    "Static assets not available.",
)


RegistryDep = Annotated[RegistryGateway, Depends(get_registry)]
ExporterDep = Annotated[ConfigExporter, Depends(get_exporter)]
AssetsDep = Annotated[AssetStore, Depends(get_assets)]
