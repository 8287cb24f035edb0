"""ASGI middleware for the admin API."""

from __future__ import annotations

__all__ = ["AdminPathMiddleware", "ETagMiddleware", "make_etag"]

import base64
import hashlib

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp, Receive, Scope, Send

# Headers repeated on a 304 so caches can refresh their stored entry
_NOT_MODIFIED_HEADERS = ("cache-control", "etag", "vary")


class AdminPathMiddleware:
    """Strip the configured admin path prefix before routing.

    With admin_path "/@varnish-agent", a request for
    "/@varnish-agent/directors" is routed as "/directors" and
    "/@varnish-agent" as "/". Other paths pass through unchanged, so the
    agent answers both with and without the prefix.
    """

    def __init__(self, app: ASGIApp, admin_path: str) -> None:
        self.app = app
        self.admin_path = admin_path.rstrip("/")

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and self.admin_path:
            path: str = scope["path"]
            if path == self.admin_path or path.startswith(f"{self.admin_path}/"):
                scope = dict(scope)
                scope["path"] = path[len(self.admin_path) :] or "/"
                scope["raw_path"] = scope["path"].encode("utf-8")
        await self.app(scope, receive, send)


def make_etag(body: bytes) -> str:
    """Strong ETag from the body length and its SHA-1 digest."""
    digest = base64.urlsafe_b64encode(hashlib.sha1(body).digest()).decode("ascii")
    return f'"{len(body):x}-{digest}"'


def _etag_matches(if_none_match: str, etag: str) -> bool:
    """Weak comparison of an If-None-Match header against an ETag."""
    if if_none_match.strip() == "*":
        return True
    candidates = (tag.strip() for tag in if_none_match.split(","))
    return any(tag.removeprefix("W/") == etag for tag in candidates)


class ETagMiddleware(BaseHTTPMiddleware):
    """Tag successful GET responses and answer matching conditional GETs with 304.

    The tag is computed from the uncompressed body, so this middleware
    sits inside GZipMiddleware.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        if request.method not in ("GET", "HEAD") or response.status_code != 200:
            return response

        body = b"".join([chunk async for chunk in response.body_iterator])
        headers = dict(response.headers)
        etag = headers.get("etag") or make_etag(body)
        headers["etag"] = etag

        if_none_match = request.headers.get("if-none-match")
        if if_none_match and _etag_matches(if_none_match, etag):
            return Response(
                status_code=304,
                headers={k: v for k, v in headers.items() if k in _NOT_MODIFIED_HEADERS},
            )

        return Response(
            content=body,
            status_code=response.status_code,
            headers=headers,
            background=response.background,
        )
