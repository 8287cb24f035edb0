"""Allow ``python -m varnish_agent``."""

from varnish_agent.cli.main import cli

if __name__ == "__main__":
    cli()
