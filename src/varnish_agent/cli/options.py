"""Shared click options for commands that talk to a running agent."""

from __future__ import annotations

__all__ = ["AgentTarget", "agent_options"]

from collections.abc import Callable
from dataclasses import dataclass
from functools import wraps
from typing import Any

import click

from varnish_agent.constants import AUTH_ENV_VAR, DEFAULT_AGENT_URL


@dataclass(frozen=True)
class AgentTarget:
    """Where and how to reach the agent's admin API."""

    url: str
    auth: str | None = None


def agent_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add --url/--auth options and pass them as a ``target`` AgentTarget."""

    @click.option(
        "--url",
        envvar="VARNISH_AGENT_URL",
        default=DEFAULT_AGENT_URL,
        show_default=True,
        help="Agent base URL (include the admin path if one is configured)",
    )
    @click.option(
        "--auth",
        envvar=AUTH_ENV_VAR,
        default=None,
        help="Basic auth credentials as user:password",
    )
    @wraps(func)
    def wrapper(*args: Any, url: str, auth: str | None, **kwargs: Any) -> Any:
        return func(*args, target=AgentTarget(url=url.rstrip("/"), auth=auth or None), **kwargs)

    return wrapper
