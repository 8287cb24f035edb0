"""Custom exceptions for varnish-agent.

This module contains all custom exceptions used throughout the package.
Each request-level exception carries the HTTP status and error code the
transport layer maps it to, so the registry and exporter stay free of
HTTP concerns:

    - InvalidInputError (400): malformed payload or empty director name
    - UnauthorizedError (401): credential check failed
    - DirectorNotFoundError (404): name absent on get/update
    - DirectorExistsError (409): duplicate name on create
    - UpstreamError (502): engine fetch/save/render failure

ConfigurationError is raised at startup only, never while serving.

Usage:
    from varnish_agent.exceptions import DirectorNotFoundError, UpstreamError
"""

from __future__ import annotations

__all__ = [
    "ConfigurationError",
    "DirectorAgentError",
    "DirectorExistsError",
    "DirectorNotFoundError",
    "InvalidInputError",
    "UnauthorizedError",
    "UpstreamError",
]

from typing import Any


class DirectorAgentError(Exception):
    """Base exception for failures surfaced to an administrative caller.

    Attributes:
        status_code: HTTP status the transport layer responds with.
        error_code: Stable error code for programmatic handling.
        message: Human-readable message.
        details: Optional contextual details (e.g. the director name).
    """

    status_code: int = 500
    error_code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        return self.message


class InvalidInputError(DirectorAgentError):
    """Payload is malformed or a required field (the name) is missing or empty."""

    status_code = 400
    error_code = "INVALID_INPUT"


class UnauthorizedError(DirectorAgentError):
    """Supplied credentials do not match the configured ones."""

    status_code = 401
    error_code = "AUTH_REQUIRED"


class DirectorNotFoundError(DirectorAgentError):
    """No director with the requested name exists."""

    status_code = 404
    error_code = "DIRECTOR_NOT_FOUND"

    def __init__(self, name: str) -> None:
        super().__init__(f"Director '{name}' not found", details={"name": name})
        self.name = name


class DirectorExistsError(DirectorAgentError):
    """A director with the requested name already exists."""

    status_code = 409
    error_code = "DIRECTOR_EXISTS"

    def __init__(self, name: str) -> None:
        super().__init__(f"Director '{name}' already exists", details={"name": name})
        self.name = name


class UpstreamError(DirectorAgentError):
    """The configuration engine could not list, save or render.

    Raised by engines and by the gateway/exporter when wrapping unexpected
    engine failures. The engine's own 5xx status is kept when it provided one,
    otherwise the failure is reported as 502 Bad Gateway.

    Attributes:
        operation: Engine operation that failed ("list", "save", "render", "snapshot").
        upstream_status: HTTP status returned by a remote engine, if any.
    """

    status_code = 502
    error_code = "UPSTREAM_ERROR"

    def __init__(
        self,
        message: str,
        *,
        operation: str,
        upstream_status: int | None = None,
    ) -> None:
        details: dict[str, Any] = {"operation": operation}
        if upstream_status is not None:
            details["upstream_status"] = upstream_status
        super().__init__(message, details=details)
        self.operation = operation
        self.upstream_status = upstream_status
        if upstream_status is not None and 500 <= upstream_status <= 599:
            self.status_code = upstream_status


class ConfigurationError(Exception):
    """Configuration file or environment override is invalid.

    Raised when:
    - Config file contains invalid JSON
    - Config file fails Pydantic validation
    - An environment override has an invalid value
    """
