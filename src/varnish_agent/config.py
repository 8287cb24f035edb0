"""Application configuration for varnish-agent.

Defines configuration models for the admin API, the engine connection,
logging and optional basic authentication. Config is read from a JSON file
(optional) and then overridden from the environment, once, at startup.

Example usage:
    config = AppConfig.load(config_path)
    config.save(config_path)

Environment overrides:
    AUTH=user[:password]            enable basic auth on the admin API
    VARNISH_AGENT_ENGINE_URL=...    engine base URL
    VARNISH_AGENT_ADMIN_PATH=...    admin path prefix (e.g. "/@varnish-agent")
"""

from __future__ import annotations

__all__ = [
    "ApiConfig",
    "AppConfig",
    "AuthConfig",
    "EngineConfig",
    "LoggingConfig",
    "get_default_config_path",
]

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Literal

import click
from pydantic import BaseModel, Field, ValidationError, field_validator

from varnish_agent.constants import (
    ADMIN_PATH_ENV_VAR,
    APP_NAME,
    AUTH_ENV_VAR,
    DEFAULT_API_HOST,
    DEFAULT_API_PORT,
    DEFAULT_ENGINE_TIMEOUT_SECONDS,
    DEFAULT_ENGINE_URL,
    ENGINE_URL_ENV_VAR,
    MAX_ENGINE_TIMEOUT_SECONDS,
    MIN_ENGINE_TIMEOUT_SECONDS,
)
from varnish_agent.exceptions import ConfigurationError


def get_default_config_path() -> Path:
    """Get the OS-appropriate config file path (via click.get_app_dir)."""
    return Path(click.get_app_dir(APP_NAME)) / "config.json"


# =============================================================================
# Section models
# =============================================================================


class ApiConfig(BaseModel):
    """Admin API listener configuration.

    Attributes:
        host: Interface to bind.
        port: TCP port to bind.
        admin_path: Optional path prefix stripped from incoming requests, so
            the agent can be reached through the cache it manages.
    """

    host: str = Field(default=DEFAULT_API_HOST, min_length=1)
    port: int = Field(default=DEFAULT_API_PORT, ge=1024, le=65535)
    admin_path: str = ""

    @field_validator("admin_path")
    @classmethod
    def _normalize_admin_path(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if value and not value.startswith("/"):
            value = f"/{value}"
        return value


class EngineConfig(BaseModel):
    """Connection to the configuration engine.

    Attributes:
        url: Engine API base URL.
        timeout_seconds: Per-request timeout.
    """

    url: str = Field(default=DEFAULT_ENGINE_URL, min_length=1)
    timeout_seconds: float = Field(
        default=DEFAULT_ENGINE_TIMEOUT_SECONDS,
        ge=MIN_ENGINE_TIMEOUT_SECONDS,
        le=MAX_ENGINE_TIMEOUT_SECONDS,
    )


class LoggingConfig(BaseModel):
    """Logging configuration.

    Attributes:
        log_level: Console log level.
        log_file: Optional JSONL file receiving warnings and errors.
    """

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_file: str | None = None


class AuthConfig(BaseModel):
    """Basic authentication credentials for the admin API.

    A configured username must match exactly; the password is only
    checked when one is configured.
    """

    username: str = Field(min_length=1)
    password: str | None = None

    @classmethod
    def parse(cls, value: str) -> "AuthConfig | None":
        """Parse the ``user[:password]`` form. Empty string disables auth.

        The split happens on the first colon, so passwords may contain colons.

        Raises:
            ConfigurationError: If a password is given without a username.
        """
        if not value:
            return None
        username, sep, password = value.partition(":")
        if not username:
            raise ConfigurationError("Auth value must start with a username ('user[:password]')")
        return cls(username=username, password=password if sep else None)


# =============================================================================
# Application config
# =============================================================================


class AppConfig(BaseModel):
    """Complete agent configuration.

    Attributes:
        api: Admin API listener settings.
        engine: Engine connection settings.
        logging: Logging settings.
        auth: Basic auth credentials (None = authentication disabled).
        static_dir: Directory holding the built admin UI (None = no UI).
    """

    api: ApiConfig = Field(default_factory=ApiConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    auth: AuthConfig | None = None
    static_dir: str | None = None

    model_config = {"extra": "ignore"}

    @classmethod
    def load(
        cls,
        path: Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> "AppConfig":
        """Load config from an optional JSON file, then apply env overrides.

        Args:
            path: Config file. A missing file yields defaults.
            environ: Environment mapping (defaults to os.environ).

        Returns:
            Validated configuration.

        Raises:
            ConfigurationError: If the file is not valid JSON or fails validation.
        """
        data: dict = {}
        if path is not None and path.exists():
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"Invalid JSON in config file {path}: {e}") from e
            except OSError as e:
                raise ConfigurationError(f"Cannot read config file {path}: {e}") from e
            if not isinstance(data, dict):
                raise ConfigurationError(f"Config file {path} must contain a JSON object")

        try:
            config = cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration in {path}: {e}") from e

        return config.with_env_overrides(os.environ if environ is None else environ)

    def with_env_overrides(self, environ: Mapping[str, str]) -> "AppConfig":
        """Return a copy with environment overrides applied."""
        updated = self.model_copy(deep=True)

        auth_value = environ.get(AUTH_ENV_VAR, "")
        if auth_value:
            updated.auth = AuthConfig.parse(auth_value)

        engine_url = environ.get(ENGINE_URL_ENV_VAR, "").strip()
        if engine_url:
            updated.engine = updated.engine.model_copy(update={"url": engine_url})

        admin_path = environ.get(ADMIN_PATH_ENV_VAR)
        if admin_path is not None:
            try:
                updated.api = ApiConfig(
                    host=updated.api.host,
                    port=updated.api.port,
                    admin_path=admin_path,
                )
            except ValidationError as e:
                raise ConfigurationError(f"Invalid {ADMIN_PATH_ENV_VAR}: {e}") from e

        return updated

    def save(self, path: Path) -> None:
        """Write the configuration as formatted JSON.

        Args:
            path: Destination file; parent directories are created.
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.model_dump(), indent=2) + "\n", encoding="utf-8")
