"""In-process configuration engine.

Keeps the authoritative director list in memory. Used when the agent is
embedded next to the component that renders and applies VCL, and as the
engine behind the test suite.
"""

from __future__ import annotations

__all__ = ["InMemoryEngine", "Renderer"]

import asyncio
import copy
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from varnish_agent.exceptions import UpstreamError
from varnish_agent.registry.models import Director

Renderer = Callable[[list[Director]], str]


class InMemoryEngine:
    """Engine holding directors, a config snapshot and a VCL renderer.

    Directors are copied on every read and write so callers never share
    mutable state with the engine. Saves are serialized by an internal lock
    and bump ``version``.

    Attributes:
        version: Number of successful saves.
    """

    def __init__(
        self,
        directors: Iterable[Director] = (),
        *,
        snapshot: Mapping[str, Any] | None = None,
        renderer: Renderer | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            directors: Initial director collection.
            snapshot: Active low-level configuration returned by config_snapshot().
            renderer: Callable producing VCL from the collection. Without one,
                render_config() fails with UpstreamError.
        """
        self._directors = [d.model_copy(deep=True) for d in directors]
        self._snapshot = copy.deepcopy(dict(snapshot or {}))
        self._renderer = renderer
        self._lock = asyncio.Lock()
        self.version = 0

    async def list_directors(self) -> list[Director]:
        return [d.model_copy(deep=True) for d in self._directors]

    async def save(self, directors: list[Director]) -> None:
        async with self._lock:
            self._directors = [d.model_copy(deep=True) for d in directors]
            self.version += 1

    async def render_config(self) -> str:
        if self._renderer is None:
            raise UpstreamError("No VCL renderer configured", operation="render")
        return self._renderer(await self.list_directors())

    def config_snapshot(self) -> dict[str, Any]:
        return copy.deepcopy(self._snapshot)
