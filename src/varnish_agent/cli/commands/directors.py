"""Directors command group for varnish-agent CLI.

Manages directors on a running agent through its admin API.
"""

from __future__ import annotations

__all__ = ["directors"]

import json
from typing import Any
from urllib.parse import quote

import click

from varnish_agent.cli.api_client import api_request
from varnish_agent.cli.options import AgentTarget, agent_options
from varnish_agent.cli.styling import style_dim, style_header, style_success


def _parse_payload(payload: str) -> dict[str, Any]:
    """Parse a director JSON argument; "-" reads it from stdin."""
    if payload == "-":
        payload = click.get_text_stream("stdin").read()
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"Invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise click.BadParameter("Director must be a JSON object")
    return data


def _director_path(name: str) -> str:
    return f"/directors/{quote(name, safe='')}"


def _request(target: AgentTarget, method: str, endpoint: str, json_data: Any = None) -> Any:
    return api_request(method, endpoint, base_url=target.url, auth=target.auth, json_data=json_data)


@click.group()
def directors() -> None:
    """Manage directors (backend pools)."""


@directors.command("list")
@agent_options
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_cmd(target: AgentTarget, as_json: bool) -> None:
    """List all directors sorted by name."""
    data = _request(target, "GET", "/directors")
    items = data.get("directors", []) if isinstance(data, dict) else []

    if as_json:
        click.echo(json.dumps(items, indent=2))
        return

    click.echo(style_header(f"Directors ({len(items)})"))
    if not items:
        click.echo(style_dim("No directors configured."))
        return
    for item in items:
        extra = {k: v for k, v in item.items() if k != "name"}
        summary = json.dumps(extra, separators=(",", ":")) if extra else ""
        click.echo(f"  {item.get('name', '')}  {style_dim(summary)}".rstrip())


@directors.command("show")
@agent_options
@click.argument("name")
def show_cmd(target: AgentTarget, name: str) -> None:
    """Show one director as JSON."""
    data = _request(target, "GET", _director_path(name))
    click.echo(json.dumps(data, indent=2))


@directors.command("add")
@agent_options
@click.argument("payload")
def add_cmd(target: AgentTarget, payload: str) -> None:
    """Create a director from a JSON object ("-" reads stdin).

    Example:
        varnish-agent directors add '{"name": "b1", "backends": ["10.0.0.1:8080"]}'
    """
    created = _request(target, "POST", "/directors", _parse_payload(payload))
    name = created.get("name") if isinstance(created, dict) else None
    click.echo(style_success(f"Director '{name}' created"))


@directors.command("update")
@agent_options
@click.argument("name")
@click.argument("payload")
def update_cmd(target: AgentTarget, name: str, payload: str) -> None:
    """Replace a director's content with a JSON object ("-" reads stdin)."""
    _request(target, "PATCH", _director_path(name), _parse_payload(payload))
    click.echo(style_success(f"Director '{name}' updated"))


@directors.command("remove")
@agent_options
@click.argument("name")
def remove_cmd(target: AgentTarget, name: str) -> None:
    """Delete a director (succeeds if it is already gone)."""
    _request(target, "DELETE", _director_path(name))
    click.echo(style_success(f"Director '{name}' removed"))
