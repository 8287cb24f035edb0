"""HTTP client for a configuration engine running as a separate service.

Engine API consumed:
    GET  {base}/directors  -> {"directors": [...]}
    PUT  {base}/directors  <- {"directors": [...]}  (replaces the whole list)
    GET  {base}/vcl        -> {"vcl": "..."}
    GET  {base}/config     -> active configuration object

The configuration snapshot is fetched by refresh_snapshot() (at agent
startup) and served from memory afterwards, so config_snapshot() never
fails.
"""

from __future__ import annotations

__all__ = ["RemoteEngine"]

import copy
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from varnish_agent.constants import APP_NAME, DEFAULT_ENGINE_TIMEOUT_SECONDS
from varnish_agent.exceptions import UpstreamError
from varnish_agent.registry.models import Director

_logger = logging.getLogger(f"{APP_NAME}.engine.remote")


class RemoteEngine:
    """ConfigEngine backed by the engine's HTTP API."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_ENGINE_TIMEOUT_SECONDS,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the engine client.

        Args:
            base_url: Engine API base URL (e.g. "http://127.0.0.1:4001").
            timeout: Request timeout in seconds.
            client: Pre-built client (tests pass one with a MockTransport).
                Its base_url is used as-is.
        """
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(base_url=self.base_url, timeout=timeout)
        self._snapshot: dict[str, Any] = {}

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def list_directors(self) -> list[Director]:
        body = await self._request("GET", "/directors", operation="list")
        items = body.get("directors") if isinstance(body, dict) else None
        if not isinstance(items, list):
            raise UpstreamError("Engine returned a malformed director list", operation="list")
        try:
            return [Director.model_validate(item) for item in items]
        except ValidationError as e:
            raise UpstreamError("Engine returned an invalid director", operation="list") from e

    async def save(self, directors: list[Director]) -> None:
        await self._request(
            "PUT",
            "/directors",
            operation="save",
            json_data={"directors": [d.to_payload() for d in directors]},
        )

    async def render_config(self) -> str:
        body = await self._request("GET", "/vcl", operation="render")
        vcl = body.get("vcl") if isinstance(body, dict) else None
        if not isinstance(vcl, str):
            raise UpstreamError("Engine returned a malformed VCL response", operation="render")
        return vcl

    def config_snapshot(self) -> dict[str, Any]:
        return copy.deepcopy(self._snapshot)

    async def refresh_snapshot(self) -> dict[str, Any]:
        """Fetch the active configuration from the engine and cache it.

        Returns:
            The fetched snapshot.

        Raises:
            UpstreamError: If the engine is unreachable or returns a non-object.
        """
        body = await self._request("GET", "/config", operation="snapshot")
        if not isinstance(body, dict):
            raise UpstreamError("Engine returned a malformed config snapshot", operation="snapshot")
        self._snapshot = body
        return self.config_snapshot()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        operation: str,
        json_data: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request to the engine and decode the JSON body.

        Returns:
            Decoded JSON body, or None for empty responses.

        Raises:
            UpstreamError: On transport errors, non-2xx statuses or invalid JSON.
        """
        try:
            response = await self._client.request(method, path, json=json_data)
        except httpx.HTTPError as e:
            _logger.debug("Engine %s %s failed: %s", method, path, e)
            raise UpstreamError(
                f"Engine unreachable during {operation}: {e}",
                operation=operation,
            ) from e

        if response.is_error:
            raise UpstreamError(
                f"Engine {operation} failed with HTTP {response.status_code}",
                operation=operation,
                upstream_status=response.status_code,
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(
                f"Engine returned invalid JSON during {operation}",
                operation=operation,
            ) from e
