"""Read-only configuration commands: vcl and snapshot."""

from __future__ import annotations

__all__ = ["snapshot", "vcl"]

import json

import click

from varnish_agent.cli.api_client import api_request
from varnish_agent.cli.options import AgentTarget, agent_options


@click.command()
@agent_options
def vcl(target: AgentTarget) -> None:
    """Print the VCL currently rendered by the engine."""
    data = api_request("GET", "/vcl", base_url=target.url, auth=target.auth)
    click.echo(data.get("vcl", "") if isinstance(data, dict) else "")


@click.command()
@agent_options
def snapshot(target: AgentTarget) -> None:
    """Print the engine's active configuration as JSON."""
    data = api_request("GET", "/config", base_url=target.url, auth=target.auth)
    click.echo(json.dumps(data, indent=2))
