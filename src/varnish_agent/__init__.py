"""varnish-agent: administrative control-plane for a cache fleet's directors."""

__version__ = "0.1.0"
