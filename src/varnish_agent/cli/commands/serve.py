"""Serve command for varnish-agent CLI.

Loads configuration, connects to the engine and runs the admin API.
"""

from __future__ import annotations

__all__ = ["serve"]

from pathlib import Path

import click
import uvicorn

from varnish_agent.api.assets import AssetStore
from varnish_agent.api.server import create_api_app
from varnish_agent.config import AppConfig, get_default_config_path
from varnish_agent.engine.remote import RemoteEngine
from varnish_agent.exceptions import ConfigurationError
from varnish_agent.telemetry.system_logger import (
    configure_system_logger_file,
    get_system_logger,
    set_system_log_level,
)


def load_serve_config(
    config_path: Path | None,
    *,
    host: str | None = None,
    port: int | None = None,
    engine_url: str | None = None,
    admin_path: str | None = None,
    static_dir: Path | None = None,
) -> AppConfig:
    """Load config and apply command-line overrides (highest precedence).

    Raises:
        click.ClickException: If the configuration is invalid.
    """
    try:
        config = AppConfig.load(config_path or get_default_config_path())
        api_updates: dict[str, object] = {}
        if host is not None:
            api_updates["host"] = host
        if port is not None:
            api_updates["port"] = port
        if admin_path is not None:
            api_updates["admin_path"] = admin_path
        data = config.model_dump()
        data["api"].update(api_updates)
        if engine_url is not None:
            data["engine"]["url"] = engine_url
        if static_dir is not None:
            data["static_dir"] = str(static_dir)
        return AppConfig.model_validate(data)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e
    except ValueError as e:
        raise click.ClickException(f"Invalid option: {e}") from e


@click.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file (default: OS app dir config.json)",
)
@click.option("--host", help="Interface to bind")
@click.option("--port", type=int, help="Port to bind")
@click.option("--engine-url", help="Configuration engine base URL")
@click.option("--admin-path", help='Path prefix to strip (e.g. "/@varnish-agent")')
@click.option(
    "--static-dir",
    type=click.Path(file_okay=False, exists=True, path_type=Path),
    help="Directory with the built admin UI",
)
def serve(
    config_path: Path | None,
    host: str | None,
    port: int | None,
    engine_url: str | None,
    admin_path: str | None,
    static_dir: Path | None,
) -> None:
    """Run the admin API.

    Basic auth is enabled by setting AUTH=user[:password] or the "auth"
    section of the config file.
    """
    config = load_serve_config(
        config_path,
        host=host,
        port=port,
        engine_url=engine_url,
        admin_path=admin_path,
        static_dir=static_dir,
    )

    set_system_log_level(config.logging.log_level)
    if config.logging.log_file:
        configure_system_logger_file(Path(config.logging.log_file).expanduser())
    logger = get_system_logger()

    assets = AssetStore()
    if config.static_dir:
        assets = AssetStore.from_directory(Path(config.static_dir).expanduser())

    engine = RemoteEngine(config.engine.url, timeout=config.engine.timeout_seconds)
    app = create_api_app(
        engine,
        credentials=config.auth,
        assets=assets,
        admin_path=config.api.admin_path,
    )

    logger.info(
        {
            "event": "agent_starting",
            "message": f"Serving admin API on http://{config.api.host}:{config.api.port}{config.api.admin_path}",
            "engine_url": config.engine.url,
            "auth_enabled": config.auth is not None,
            "assets": len(assets),
        }
    )
    uvicorn.run(app, host=config.api.host, port=config.api.port, log_level=config.logging.log_level.lower())
