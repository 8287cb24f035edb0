"""HTTP admin API for varnish-agent."""

from varnish_agent.api.server import create_api_app

__all__ = ["create_api_app"]
