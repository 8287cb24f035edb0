"""Command-line interface for varnish-agent."""

from varnish_agent.cli.main import cli

__all__ = ["cli"]
