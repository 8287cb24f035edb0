"""Optional HTTP Basic authentication for the admin API.

The guard is constructed once with the configured credentials (None =
disabled) and consulted before any director, VCL or config route runs.
A rejected request never reaches the registry or the exporter.

Validation policy:
- no credentials configured: every request is accepted
- username configured: supplied username must match exactly
- password also configured: supplied password must match exactly
"""

from __future__ import annotations

__all__ = [
    "AccessGuard",
    "parse_basic_authorization",
    "require_credentials",
]

import base64
import binascii
import hmac

from fastapi import Request
from fastapi.security import HTTPBasicCredentials
from fastapi.security.utils import get_authorization_scheme_param

from varnish_agent.config import AuthConfig
from varnish_agent.exceptions import UnauthorizedError
from varnish_agent.telemetry.system_logger import get_system_logger

logger = get_system_logger()


def _matches(provided: str, expected: str) -> bool:
    """Constant-time string comparison."""
    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


class AccessGuard:
    """Validates basic-auth credentials against the configured ones."""

    def __init__(self, credentials: AuthConfig | None = None) -> None:
        """Initialize the guard.

        Args:
            credentials: Expected credentials. None disables authentication.
        """
        self._credentials = credentials

    @property
    def enabled(self) -> bool:
        return self._credentials is not None

    def check(self, username: str | None, password: str | None) -> bool:
        """Return True if the supplied credentials are acceptable."""
        if self._credentials is None:
            return True
        if username is None or not _matches(username, self._credentials.username):
            return False
        if self._credentials.password is not None:
            if password is None or not _matches(password, self._credentials.password):
                return False
        return True

    def verify(self, request: Request, supplied: HTTPBasicCredentials | None) -> None:
        """Reject the request unless its credentials are acceptable.

        Args:
            request: Incoming request (for logging).
            supplied: Parsed Authorization header, None if absent or not Basic.

        Raises:
            UnauthorizedError: If authentication is enabled and fails.
        """
        if not self.enabled:
            return

        username = supplied.username if supplied else None
        password = supplied.password if supplied else None
        if self.check(username, password):
            return

        logger.warning(
            {
                "event": "unauthorized_request_rejected",
                "message": f"Rejected unauthorized request: {request.method} {request.url.path}",
                "method": request.method,
                "path": request.url.path,
                "username": username,
            }
        )
        raise UnauthorizedError("Authentication required")


def parse_basic_authorization(header: str | None) -> HTTPBasicCredentials | None:
    """Parse an ``Authorization: Basic`` header value.

    The decoded credentials are read as UTF-8 and split on the first colon,
    so both parts may hold non-ASCII characters and the password may hold
    colons.

    Returns:
        Parsed credentials, or None if the header is absent, not Basic, or
        malformed.
    """
    scheme, param = get_authorization_scheme_param(header)
    if not header or scheme.lower() != "basic":
        return None
    try:
        decoded = base64.b64decode(param, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None
    username, sep, password = decoded.partition(":")
    if not sep:
        return None
    return HTTPBasicCredentials(username=username, password=password)


async def require_credentials(request: Request) -> None:
    """Route dependency enforcing the app's AccessGuard.

    A missing guard on app.state means authentication is disabled. The
    Authorization header is only parsed when authentication is enabled;
    a malformed Basic header counts as missing credentials (401).
    """
    guard: AccessGuard | None = getattr(request.app.state, "access_guard", None)
    if guard is None or not guard.enabled:
        return
    supplied = parse_basic_authorization(request.headers.get("Authorization"))
    guard.verify(request, supplied)
