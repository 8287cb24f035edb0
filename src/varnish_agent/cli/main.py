"""Main CLI entry point for varnish-agent.

Commands:
    serve      - Run the admin API
    directors  - Director management on a running agent (list, show, add, update, remove)
    vcl        - Print the rendered VCL
    snapshot   - Print the engine's active configuration

Subcommand help:
    varnish-agent COMMAND -h
"""

from __future__ import annotations

__all__ = ["cli"]

import click

from varnish_agent import __version__

from .commands.config import snapshot, vcl
from .commands.directors import directors
from .commands.serve import serve


@click.group(
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option("--version", "-v", is_flag=True, help="Show version")
@click.pass_context
def cli(ctx: click.Context, version: bool) -> None:
    """varnish-agent: director admin API for the cache fleet."""
    if version:
        click.echo(f"varnish-agent {__version__}")
        ctx.exit(0)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(directors)
cli.add_command(serve)
cli.add_command(snapshot)
cli.add_command(vcl)
