"""Unit tests for director API routes.

Uses AAA pattern (Arrange-Act-Assert) for clarity.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from varnish_agent.api.server import create_api_app
from varnish_agent.engine.memory import InMemoryEngine
from varnish_agent.exceptions import UpstreamError
from varnish_agent.registry.models import Director


def _stored(engine: InMemoryEngine) -> list[dict]:
    return [d.to_payload() for d in engine._directors]


# =============================================================================
# Tests: GET /directors
# =============================================================================


class TestListDirectors:
    """Tests for GET /directors endpoint."""

    def test_returns_sorted_directors(self) -> None:
        """Given directors in any order, returns them sorted by name."""
        # Arrange
        engine = InMemoryEngine([Director(name="web"), Director(name="api", weight=2)])
        client = TestClient(create_api_app(engine))

        # Act
        response = client.get("/directors")

        # Assert
        assert response.status_code == 200
        assert response.json() == {"directors": [{"name": "api", "weight": 2}, {"name": "web"}]}

    def test_empty_collection(self, client: TestClient) -> None:
        response = client.get("/directors")

        assert response.status_code == 200
        assert response.json() == {"directors": []}

    def test_upstream_failure_returns_502(self) -> None:
        """Given an engine that cannot list, returns 502 UPSTREAM_ERROR."""

        class DownEngine(InMemoryEngine):
            async def list_directors(self) -> list[Director]:
                raise UpstreamError("engine down", operation="list")

        client = TestClient(create_api_app(DownEngine()))

        response = client.get("/directors")

        assert response.status_code == 502
        assert response.json()["detail"]["code"] == "UPSTREAM_ERROR"
        assert response.json()["detail"]["details"]["operation"] == "list"


# =============================================================================
# Tests: GET /directors/{name}
# =============================================================================


class TestGetDirector:
    """Tests for GET /directors/{name} endpoint."""

    def test_returns_director(self) -> None:
        engine = InMemoryEngine([Director(name="b1", backends=["10.0.0.1:8080"])])
        client = TestClient(create_api_app(engine))

        response = client.get("/directors/b1")

        assert response.status_code == 200
        assert response.json() == {"name": "b1", "backends": ["10.0.0.1:8080"]}

    def test_absent_returns_404(self, client: TestClient) -> None:
        response = client.get("/directors/missing")

        assert response.status_code == 404
        detail = response.json()["detail"]
        assert detail["code"] == "DIRECTOR_NOT_FOUND"
        assert detail["details"] == {"name": "missing"}


# =============================================================================
# Tests: POST /directors
# =============================================================================


class TestCreateDirector:
    """Tests for POST /directors endpoint."""

    def test_creates_and_echoes(self, client: TestClient, engine: InMemoryEngine) -> None:
        """Given a new director, returns 201 with the created object."""
        payload = {"name": "b1", "backends": ["10.0.0.1:8080"], "type": "random"}

        response = client.post("/directors", json=payload)

        assert response.status_code == 201
        assert response.json() == payload
        assert _stored(engine) == [payload]

    def test_duplicate_returns_409(self, client: TestClient, engine: InMemoryEngine) -> None:
        client.post("/directors", json={"name": "b1"})

        response = client.post("/directors", json={"name": "b1", "weight": 3})

        assert response.status_code == 409
        assert response.json()["detail"]["code"] == "DIRECTOR_EXISTS"
        assert _stored(engine) == [{"name": "b1"}]

    @pytest.mark.parametrize("payload", [{"name": ""}, {"weight": 5}])
    def test_empty_or_missing_name_returns_400(
        self, client: TestClient, engine: InMemoryEngine, payload: dict
    ) -> None:
        response = client.post("/directors", json=payload)

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "INVALID_INPUT"
        assert engine.version == 0

    def test_malformed_json_returns_400(self, client: TestClient, engine: InMemoryEngine) -> None:
        response = client.post(
            "/directors",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "INVALID_INPUT"
        assert engine.version == 0

    @pytest.mark.parametrize("payload", [["b1"], {"name": 1}])
    def test_wrong_shape_returns_400(self, client: TestClient, payload: object) -> None:
        response = client.post("/directors", json=payload)

        assert response.status_code == 400


# =============================================================================
# Tests: PATCH /directors/{name}
# =============================================================================


class TestUpdateDirector:
    """Tests for PATCH /directors/{name} endpoint."""

    def test_replaces_content_returns_204(self, client: TestClient) -> None:
        client.post("/directors", json={"name": "b1", "backends": ["a"]})

        response = client.patch("/directors/b1", json={"name": "ignored", "weight": 5})

        assert response.status_code == 204
        assert response.content == b""
        assert client.get("/directors/b1").json() == {"name": "b1", "weight": 5}
        assert client.get("/directors/ignored").status_code == 404

    def test_absent_returns_404(self, client: TestClient, engine: InMemoryEngine) -> None:
        response = client.patch("/directors/missing", json={"weight": 1})

        assert response.status_code == 404
        assert engine.version == 0

    def test_missing_body_returns_400(self, client: TestClient) -> None:
        client.post("/directors", json={"name": "b1"})

        response = client.patch("/directors/b1")

        assert response.status_code == 400


# =============================================================================
# Tests: DELETE /directors/{name}
# =============================================================================


class TestDeleteDirector:
    """Tests for DELETE /directors/{name} endpoint."""

    def test_deletes_existing(self, client: TestClient, engine: InMemoryEngine) -> None:
        client.post("/directors", json={"name": "b1"})

        response = client.delete("/directors/b1")

        assert response.status_code == 204
        assert _stored(engine) == []

    def test_absent_returns_204(self, client: TestClient, engine: InMemoryEngine) -> None:
        response = client.delete("/directors/absent")

        assert response.status_code == 204
        assert engine.version == 0

    def test_repeated_delete_succeeds(self, client: TestClient) -> None:
        client.post("/directors", json={"name": "b1"})

        assert client.delete("/directors/b1").status_code == 204
        assert client.delete("/directors/b1").status_code == 204

    def test_persist_failure_returns_upstream_status(self) -> None:
        """Given a failing save, the failure is reported, not swallowed."""

        class ReadOnlyEngine(InMemoryEngine):
            async def save(self, directors: list[Director]) -> None:
                raise UpstreamError("save refused", operation="save", upstream_status=500)

        client = TestClient(create_api_app(ReadOnlyEngine([Director(name="b1")])))

        response = client.delete("/directors/b1")

        assert response.status_code == 500
        assert response.json()["detail"]["code"] == "UPSTREAM_ERROR"


# =============================================================================
# Tests: full scenario
# =============================================================================


class TestDirectorLifecycle:
    """End-to-end sequence over an initially empty registry."""

    def test_create_conflict_update_delete_list(self, client: TestClient, engine: InMemoryEngine) -> None:
        assert client.post("/directors", json={"name": "b1"}).status_code == 201
        assert _stored(engine) == [{"name": "b1"}]

        assert client.post("/directors", json={"name": "b1"}).status_code == 409
        assert _stored(engine) == [{"name": "b1"}]

        assert client.patch("/directors/b1", json={"name": "ignored", "weight": 5}).status_code == 204
        assert client.get("/directors/b1").json() == {"name": "b1", "weight": 5}

        assert client.delete("/directors/absent").status_code == 204
        assert _stored(engine) == [{"name": "b1", "weight": 5}]

        assert client.get("/directors").json() == {"directors": [{"name": "b1", "weight": 5}]}
