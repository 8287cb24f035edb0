"""FastAPI server for the director admin API and the admin UI assets.

Routes:
- /directors, /directors/{name}  - director registry (basic auth if enabled)
- /vcl, /config                  - rendered VCL and engine snapshot (basic auth if enabled)
- /ping                          - liveness
- /, /static/*                   - admin UI assets

Usage:
    engine = RemoteEngine("http://127.0.0.1:4001")
    app = create_api_app(engine, credentials=AuthConfig(username="admin", password="secret"))
    uvicorn.run(app, host="127.0.0.1", port=4000)
"""

from __future__ import annotations

__all__ = ["create_api_app"]

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.middleware.gzip import GZipMiddleware

from varnish_agent import __version__
from varnish_agent.api.assets import AssetStore
from varnish_agent.api.errors import register_exception_handlers
from varnish_agent.api.guard import AccessGuard
from varnish_agent.api.middleware import AdminPathMiddleware, ETagMiddleware
from varnish_agent.api.routes import config, directors, health, static
from varnish_agent.config import AuthConfig
from varnish_agent.constants import GZIP_MINIMUM_SIZE
from varnish_agent.engine.protocol import ConfigEngine
from varnish_agent.engine.remote import RemoteEngine
from varnish_agent.exceptions import UpstreamError
from varnish_agent.exporter import ConfigExporter
from varnish_agent.registry.gateway import RegistryGateway
from varnish_agent.telemetry.system_logger import get_system_logger

logger = get_system_logger()


def _create_lifespan(engine: ConfigEngine):
    """Refresh a remote engine's snapshot on startup and close it on shutdown."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if isinstance(engine, RemoteEngine):
            try:
                await engine.refresh_snapshot()
            except UpstreamError as e:
                logger.error(
                    {
                        "event": "config_snapshot_unavailable",
                        "message": f"Could not fetch engine config snapshot: {e.message}",
                        "engine_url": engine.base_url,
                    }
                )
        try:
            yield
        finally:
            if isinstance(engine, RemoteEngine):
                await engine.aclose()

    return lifespan


def create_api_app(
    engine: ConfigEngine,
    *,
    credentials: AuthConfig | None = None,
    assets: AssetStore | None = None,
    admin_path: str = "",
) -> FastAPI:
    """Create the FastAPI application with all routes.

    Args:
        engine: Configuration engine owning the director list.
        credentials: Basic auth credentials. None disables authentication.
        assets: Admin UI assets. None serves no UI (/ and /static/* are 404).
        admin_path: Optional path prefix stripped before routing.

    Returns:
        Configured FastAPI application.
    """
    app = FastAPI(
        title="varnish-agent",
        description="Director admin API for the cache fleet",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=_create_lifespan(engine),
    )

    app.state.engine = engine
    app.state.registry = RegistryGateway(engine)
    app.state.exporter = ConfigExporter(engine)
    app.state.access_guard = AccessGuard(credentials)
    app.state.assets = assets if assets is not None else AssetStore()

    app.add_middleware(ETagMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=GZIP_MINIMUM_SIZE)
    if admin_path:
        app.add_middleware(AdminPathMiddleware, admin_path=admin_path)

    register_exception_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(directors.router, prefix="/directors", tags=["directors"])
    app.include_router(config.router, tags=["config"])
    app.include_router(static.router, tags=["static"])

    return app
