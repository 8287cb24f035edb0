"""Admin UI asset endpoints. Never require authentication.

Provides:
- GET /               - index.html, cached 10 seconds
- GET /static/{path}  - bundled assets, cached 365 days by clients and
                        1 hour by shared caches; query strings are rejected
"""

from __future__ import annotations

__all__ = ["router"]

from fastapi import APIRouter, Request, Response

from varnish_agent.api.deps import AssetsDep
from varnish_agent.api.errors import APIError, ErrorCode
from varnish_agent.constants import (
    INDEX_FILE,
    ROOT_CACHE_MAX_AGE_SECONDS,
    STATIC_CACHE_MAX_AGE_SECONDS,
    STATIC_PREFIX,
    STATIC_SHARED_CACHE_MAX_AGE_SECONDS,
)

router = APIRouter()

ROOT_CACHE_CONTROL = f"public, max-age={ROOT_CACHE_MAX_AGE_SECONDS}"
STATIC_CACHE_CONTROL = (
    f"public, max-age={STATIC_CACHE_MAX_AGE_SECONDS}, s-maxage={STATIC_SHARED_CACHE_MAX_AGE_SECONDS}"
)


def _asset_response(assets: AssetsDep, path: str, cache_control: str) -> Response:
    if not assets.has(path):
        raise APIError(
            status_code=404,
            code=ErrorCode.ASSET_NOT_FOUND,
            message=f"Asset '{path}' not found",
            details={"path": path},
        )
    return Response(
        content=assets.get(path),
        media_type=assets.media_type(path),
        headers={"Cache-Control": cache_control},
    )


@router.get("/", response_class=Response)
async def serve_index(assets: AssetsDep) -> Response:
    """Serve the admin UI entry page."""
    return _asset_response(assets, INDEX_FILE, ROOT_CACHE_CONTROL)


@router.get("/static/{file_path:path}", response_class=Response)
async def serve_static(file_path: str, request: Request, assets: AssetsDep) -> Response:
    """Serve a bundled static asset.

    Raises:
        APIError: 400 if the URL has a query string, 404 if the asset is missing.
    """
    if request.url.query:
        raise APIError(
            status_code=400,
            code=ErrorCode.QUERY_STRING_NOT_ALLOWED,
            message="Query string is not allowed for static assets",
        )
    return _asset_response(assets, f"{STATIC_PREFIX}/{file_path}", STATIC_CACHE_CONTROL)
