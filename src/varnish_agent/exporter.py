"""Read-only access to the engine's rendered VCL and active configuration."""

from __future__ import annotations

__all__ = ["ConfigExporter"]

from typing import TYPE_CHECKING, Any

from varnish_agent.exceptions import UpstreamError
from varnish_agent.telemetry.system_logger import get_system_logger

if TYPE_CHECKING:
    from varnish_agent.engine.protocol import ConfigEngine

logger = get_system_logger()


class ConfigExporter:
    """Returns engine output verbatim. Holds no state of its own."""

    def __init__(self, engine: "ConfigEngine") -> None:
        self._engine = engine

    async def render(self) -> str:
        """Return the current VCL text exactly as the engine rendered it.

        Raises:
            UpstreamError: If the engine fails to render.
        """
        try:
            return await self._engine.render_config()
        except UpstreamError as e:
            self._log_render_failure(e)
            raise
        except Exception as e:
            error = UpstreamError(f"Failed to render VCL: {e}", operation="render")
            self._log_render_failure(error)
            raise error from e

    def snapshot(self) -> dict[str, Any]:
        """Return the engine's active low-level configuration untransformed."""
        return self._engine.config_snapshot()

    @staticmethod
    def _log_render_failure(error: UpstreamError) -> None:
        logger.warning(
            {
                "event": "vcl_render_failed",
                "message": error.message,
                "upstream_status": error.upstream_status,
            }
        )
