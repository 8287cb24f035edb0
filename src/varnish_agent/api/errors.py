"""Structured API error handling.

This module provides:
- ErrorCode enum with domain-grouped error codes
- APIError exception class for structured error responses
- Exception handlers mapping domain errors, validation errors and
  unexpected faults to consistent JSON bodies

Usage:
    from varnish_agent.api.errors import APIError, ErrorCode

    raise APIError(
        status_code=404,
        code=ErrorCode.ASSET_NOT_FOUND,
        message="Asset not found",
        details={"path": "static/app.js"},
    )

Response format:
    {
        "detail": {
            "code": "DIRECTOR_NOT_FOUND",
            "message": "Director 'b1' not found",
            "details": {"name": "b1"}
        }
    }
"""

from __future__ import annotations

__all__ = [
    "APIError",
    "ErrorCode",
    "api_error_handler",
    "director_error_handler",
    "http_exception_handler",
    "register_exception_handlers",
    "unhandled_exception_handler",
    "validation_error_handler",
]

from enum import Enum
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from varnish_agent.constants import AUTH_REALM
from varnish_agent.exceptions import DirectorAgentError, UnauthorizedError
from varnish_agent.telemetry.system_logger import get_system_logger

logger = get_system_logger()


class ErrorCode(str, Enum):
    """API error codes for programmatic handling.

    Codes are namespaced by domain:
    - AUTH_*: Authentication errors
    - DIRECTOR_*: Director registry errors
    - ASSET_*: Static asset errors
    - INVALID_INPUT: Malformed payloads
    - INTERNAL_*/UPSTREAM_*: Server and engine errors
    """

    # Authentication errors (401)
    AUTH_REQUIRED = "AUTH_REQUIRED"

    # Director errors (404, 409)
    DIRECTOR_NOT_FOUND = "DIRECTOR_NOT_FOUND"
    DIRECTOR_EXISTS = "DIRECTOR_EXISTS"

    # Asset errors (400, 404)
    ASSET_NOT_FOUND = "ASSET_NOT_FOUND"
    QUERY_STRING_NOT_ALLOWED = "QUERY_STRING_NOT_ALLOWED"

    # Generic errors
    INVALID_INPUT = "INVALID_INPUT"
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    CONFLICT = "CONFLICT"

    # Internal errors (500, 502, 503)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"


class APIError(HTTPException):
    """Structured API error with error code.

    Attributes:
        status_code: HTTP status code.
        code: Error code from ErrorCode enum.
        error_message: Human-readable error message.
        error_details: Optional contextual details.
    """

    def __init__(
        self,
        status_code: int,
        code: ErrorCode,
        message: str,
        details: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.code = code
        self.error_message = message
        self.error_details = details

        detail: dict[str, Any] = {
            "code": code.value,
            "message": message,
        }
        if details:
            detail["details"] = details

        super().__init__(status_code=status_code, detail=detail, headers=headers)


def _error_body(code: str, message: str, details: dict[str, Any] | None = None) -> dict[str, Any]:
    detail: dict[str, Any] = {"code": code, "message": message}
    if details:
        detail["details"] = details
    return {"detail": detail}


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions with structured response."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=exc.headers,
    )


async def director_error_handler(request: Request, exc: DirectorAgentError) -> JSONResponse:
    """Map domain errors raised by the registry, exporter or guard to responses.

    Args:
        request: FastAPI request object.
        exc: Domain error carrying its status code and error code.

    Returns:
        JSONResponse with structured error detail. Unauthorized responses
        carry the basic-auth challenge header.
    """
    headers = None
    if isinstance(exc, UnauthorizedError):
        headers = {"WWW-Authenticate": f'Basic realm="{AUTH_REALM}"'}

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(ErrorCode(exc.error_code).value, exc.message, exc.details),
        headers=headers,
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors (malformed JSON, wrong types) as 400.

    Args:
        request: FastAPI request object.
        exc: RequestValidationError from Pydantic.

    Returns:
        JSONResponse with INVALID_INPUT detail and field-level errors.
    """
    errors = exc.errors()
    first_error = errors[0] if errors else {}

    loc = first_error.get("loc", [])
    msg = first_error.get("msg", "Validation error")

    if len(errors) == 1:
        field_parts = [str(part) for part in loc if part != "body"]
        field_name = ".".join(field_parts)
        message = f"{field_name}: {msg}" if field_name else msg
    else:
        message = f"{len(errors)} validation errors"

    content = _error_body(ErrorCode.INVALID_INPUT.value, message)
    content["detail"]["validation_errors"] = [
        {
            "loc": list(e.get("loc", [])),
            "msg": e.get("msg", ""),
            "type": e.get("type", ""),
        }
        for e in errors
    ]

    return JSONResponse(status_code=400, content=content)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Wrap plain HTTPException details (e.g. router 404/405) in structured format."""
    if isinstance(exc.detail, dict) and "code" in exc.detail:
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    code = _status_to_error_code(exc.status_code)
    message = str(exc.detail) if exc.detail else f"HTTP {exc.status_code}"

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(code.value, message),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Turn an unexpected fault into a 500 so one bad request can't stop the server."""
    logger.error(
        {
            "event": "unhandled_exception",
            "message": f"Unhandled error on {request.method} {request.url.path}: {exc!r}",
            "method": request.method,
            "path": request.url.path,
            "error_type": type(exc).__name__,
        },
        exc_info=exc,
    )
    return JSONResponse(
        status_code=500,
        content=_error_body(ErrorCode.INTERNAL_ERROR.value, "Internal server error"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all handlers on ``app``."""
    app.add_exception_handler(APIError, api_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(DirectorAgentError, director_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)


def _status_to_error_code(status_code: int) -> ErrorCode:
    """Map HTTP status code to default error code."""
    mapping = {
        400: ErrorCode.INVALID_INPUT,
        401: ErrorCode.AUTH_REQUIRED,
        404: ErrorCode.NOT_FOUND,
        405: ErrorCode.METHOD_NOT_ALLOWED,
        409: ErrorCode.CONFLICT,
        500: ErrorCode.INTERNAL_ERROR,
        502: ErrorCode.UPSTREAM_ERROR,
        503: ErrorCode.SERVICE_UNAVAILABLE,
    }
    return mapping.get(status_code, ErrorCode.INTERNAL_ERROR)
