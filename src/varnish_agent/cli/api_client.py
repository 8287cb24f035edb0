"""API client helper for CLI commands talking to a running agent.

Authentication: when the agent has basic auth enabled, pass
``--auth user:password`` (or set AUTH); the client sends it as HTTP Basic.
"""

from __future__ import annotations

__all__ = [
    "AgentAPIError",
    "AgentNotRunningError",
    "api_request",
]

from typing import Any

import click
import httpx

from varnish_agent.constants import CLI_REQUEST_TIMEOUT_SECONDS


class AgentNotRunningError(click.ClickException):
    """Raised when the agent cannot be reached."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Agent at {url} is not reachable.\nStart it with: varnish-agent serve")
        self.url = url


class AgentAPIError(click.ClickException):
    """Raised when the agent answers with an error status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        if status_code:
            super().__init__(f"API error ({status_code}): {message}")
        else:
            super().__init__(f"API error: {message}")
        self.status_code = status_code


def _parse_auth(auth: str | None) -> tuple[str, str] | None:
    if not auth:
        return None
    username, _, password = auth.partition(":")
    return (username, password)


def api_request(
    method: str,
    endpoint: str,
    *,
    base_url: str,
    auth: str | None = None,
    json_data: Any = None,
    timeout: float = CLI_REQUEST_TIMEOUT_SECONDS,
    transport: httpx.BaseTransport | None = None,
) -> Any:
    """Make a request to the agent's admin API.

    Args:
        method: HTTP method (GET, POST, PATCH, DELETE).
        endpoint: API path (e.g., "/directors").
        base_url: Agent base URL including any admin path prefix.
        auth: Optional "user:password" for basic auth.
        json_data: Optional JSON body.
        timeout: Request timeout in seconds.
        transport: Optional httpx transport (tests use MockTransport).

    Returns:
        Decoded JSON body, the text body for non-JSON responses, or None
        for 204 No Content.

    Raises:
        AgentNotRunningError: If the agent is unreachable.
        AgentAPIError: If the agent returns an error status.
    """
    try:
        with httpx.Client(
            base_url=base_url,
            auth=_parse_auth(auth),
            timeout=timeout,
            transport=transport,
        ) as client:
            response = client.request(method, endpoint, json=json_data)
    except httpx.ConnectError as e:
        raise AgentNotRunningError(base_url) from e
    except httpx.HTTPError as e:
        raise AgentAPIError(str(e)) from e

    if response.is_error:
        raise AgentAPIError(_error_message(response), status_code=response.status_code)

    if response.status_code == 204 or not response.content:
        return None
    if response.headers.get("content-type", "").startswith("application/json"):
        return response.json()
    return response.text


def _error_message(response: httpx.Response) -> str:
    """Extract the message from a structured error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    detail = body.get("detail") if isinstance(body, dict) else None
    if isinstance(detail, dict) and "message" in detail:
        return str(detail["message"])
    return str(detail or body)
