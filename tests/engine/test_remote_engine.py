"""Tests for the HTTP engine client.

Uses httpx.MockTransport to stand in for the engine service.
"""

from __future__ import annotations

import json

import httpx
import pytest

from varnish_agent.engine.protocol import ConfigEngine
from varnish_agent.engine.remote import RemoteEngine
from varnish_agent.exceptions import UpstreamError
from varnish_agent.registry.models import Director


class FakeEngineService:
    """Minimal engine API backed by a list, recording received requests."""

    def __init__(self) -> None:
        self.directors: list[dict] = [{"name": "b", "weight": 1}, {"name": "a"}]
        self.config = {"name": "cache-01", "backends": []}
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = (request.method, request.url.path)
        if route == ("GET", "/directors"):
            return httpx.Response(200, json={"directors": self.directors})
        if route == ("PUT", "/directors"):
            self.directors = json.loads(request.content)["directors"]
            return httpx.Response(204)
        if route == ("GET", "/vcl"):
            return httpx.Response(200, json={"vcl": "vcl 4.0;\n"})
        if route == ("GET", "/config"):
            return httpx.Response(200, json=self.config)
        return httpx.Response(404)


def _engine(handler) -> RemoteEngine:
    client = httpx.AsyncClient(base_url="http://engine", transport=httpx.MockTransport(handler))
    return RemoteEngine("http://engine", client=client)


@pytest.fixture
def service() -> FakeEngineService:
    return FakeEngineService()


@pytest.fixture
def engine(service: FakeEngineService) -> RemoteEngine:
    return _engine(service.handler)


def test_satisfies_protocol(engine: RemoteEngine) -> None:
    assert isinstance(engine, ConfigEngine)


class TestListAndSave:
    """Tests for list_directors/save."""

    @pytest.mark.asyncio
    async def test_list_returns_directors_in_engine_order(self, engine: RemoteEngine) -> None:
        directors = await engine.list_directors()

        assert [d.to_payload() for d in directors] == [{"name": "b", "weight": 1}, {"name": "a"}]

    @pytest.mark.asyncio
    async def test_save_sends_whole_collection(self, engine: RemoteEngine, service: FakeEngineService) -> None:
        await engine.save([Director(name="c", backends=["10.0.0.3:80"])])

        assert service.directors == [{"name": "c", "backends": ["10.0.0.3:80"]}]
        assert service.requests[-1].method == "PUT"

    @pytest.mark.asyncio
    async def test_engine_error_status_raises_upstream_error(self) -> None:
        """A 5xx from the engine keeps its status on the UpstreamError."""
        engine = _engine(lambda request: httpx.Response(503, text="busy"))

        with pytest.raises(UpstreamError) as exc_info:
            await engine.save([])

        assert exc_info.value.operation == "save"
        assert exc_info.value.upstream_status == 503
        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_engine_4xx_maps_to_bad_gateway(self) -> None:
        """A 4xx from the engine is still a gateway failure for our caller."""
        engine = _engine(lambda request: httpx.Response(404))

        with pytest.raises(UpstreamError) as exc_info:
            await engine.list_directors()

        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_connection_error_raises_upstream_error(self) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        engine = _engine(refuse)

        with pytest.raises(UpstreamError) as exc_info:
            await engine.list_directors()

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [b"not json", b'{"items": []}', b'{"directors": [{"name": 5}]}', b"[]", b'{"directors": ["\xff"]}'],
    )
    async def test_malformed_list_raises_upstream_error(self, body: bytes) -> None:
        engine = _engine(lambda request: httpx.Response(200, content=body))

        with pytest.raises(UpstreamError):
            await engine.list_directors()


class TestRenderAndSnapshot:
    """Tests for render_config/refresh_snapshot/config_snapshot."""

    @pytest.mark.asyncio
    async def test_render_returns_text_verbatim(self, engine: RemoteEngine) -> None:
        assert await engine.render_config() == "vcl 4.0;\n"

    @pytest.mark.asyncio
    async def test_render_malformed_body_raises(self) -> None:
        engine = _engine(lambda request: httpx.Response(200, json={"vcl": 1}))

        with pytest.raises(UpstreamError) as exc_info:
            await engine.render_config()

        assert exc_info.value.operation == "render"

    @pytest.mark.asyncio
    async def test_snapshot_empty_until_refreshed(self, engine: RemoteEngine, service: FakeEngineService) -> None:
        assert engine.config_snapshot() == {}

        await engine.refresh_snapshot()

        assert engine.config_snapshot() == service.config

    @pytest.mark.asyncio
    async def test_snapshot_survives_engine_outage(self, service: FakeEngineService) -> None:
        """After a refresh, the cached snapshot is served without contacting the engine."""
        engine = _engine(service.handler)
        await engine.refresh_snapshot()
        request_count = len(service.requests)

        snapshot = engine.config_snapshot()

        assert snapshot == {"name": "cache-01", "backends": []}
        assert len(service.requests) == request_count


    @pytest.mark.asyncio
    async def test_snapshot_body_not_utf8_raises_upstream_error(self) -> None:
        """Given a body that is not UTF-8, refresh fails with UpstreamError."""
        engine = _engine(lambda request: httpx.Response(200, content=b'{"name": "\xff"}'))

        with pytest.raises(UpstreamError) as exc_info:
            await engine.refresh_snapshot()

        assert exc_info.value.operation == "snapshot"
        assert engine.config_snapshot() == {}
