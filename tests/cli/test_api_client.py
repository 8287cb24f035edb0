"""Unit tests for CLI API client."""

from __future__ import annotations

import base64
import json

import click
import httpx
import pytest

from varnish_agent.cli.api_client import AgentAPIError, AgentNotRunningError, api_request

BASE_URL = "http://agent:4000"


def _transport(response: httpx.Response) -> httpx.MockTransport:
    return httpx.MockTransport(lambda request: response)


class TestErrors:
    """Tests for client exception types."""

    def test_not_running_suggests_serve(self) -> None:
        error = AgentNotRunningError(BASE_URL)

        assert BASE_URL in str(error)
        assert "varnish-agent serve" in str(error)
        assert isinstance(error, click.ClickException)

    def test_api_error_includes_status(self) -> None:
        error = AgentAPIError("Not found", status_code=404)

        assert "404" in str(error)
        assert error.status_code == 404

    def test_api_error_without_status(self) -> None:
        error = AgentAPIError("Connection failed")

        assert error.status_code is None
        assert "Connection failed" in str(error)


class TestApiRequest:
    """Tests for api_request."""

    def test_returns_json(self) -> None:
        transport = _transport(httpx.Response(200, json={"directors": []}))

        assert api_request("GET", "/directors", base_url=BASE_URL, transport=transport) == {"directors": []}

    def test_no_content_returns_none(self) -> None:
        transport = _transport(httpx.Response(204))

        assert api_request("DELETE", "/directors/b1", base_url=BASE_URL, transport=transport) is None

    def test_text_response(self) -> None:
        transport = _transport(httpx.Response(200, text="pong"))

        assert api_request("GET", "/ping", base_url=BASE_URL, transport=transport) == "pong"

    def test_sends_basic_auth_and_body(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, json={"name": "b1"})

        api_request(
            "POST",
            "/directors",
            base_url=BASE_URL,
            auth="user:pa:ss",
            json_data={"name": "b1"},
            transport=httpx.MockTransport(handler),
        )

        expected = "Basic " + base64.b64encode(b"user:pa:ss").decode()
        assert seen[0].headers["authorization"] == expected
        assert json.loads(seen[0].content) == {"name": "b1"}

    def test_structured_error_message(self) -> None:
        body = {"detail": {"code": "DIRECTOR_NOT_FOUND", "message": "Director 'b1' not found", "details": {}}}
        transport = _transport(httpx.Response(404, json=body))

        with pytest.raises(AgentAPIError) as exc_info:
            api_request("GET", "/directors/b1", base_url=BASE_URL, transport=transport)

        assert exc_info.value.status_code == 404
        assert "Director 'b1' not found" in str(exc_info.value)

    def test_plain_error_body(self) -> None:
        transport = _transport(httpx.Response(502, text="Bad Gateway"))

        with pytest.raises(AgentAPIError, match="Bad Gateway"):
            api_request("GET", "/vcl", base_url=BASE_URL, transport=transport)

    def test_connect_error_means_not_running(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(AgentNotRunningError):
            api_request("GET", "/directors", base_url=BASE_URL, transport=httpx.MockTransport(handler))
