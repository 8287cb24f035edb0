"""Shared fixtures for varnish-agent tests."""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from varnish_agent.api.server import create_api_app
from varnish_agent.engine.memory import InMemoryEngine
from varnish_agent.registry.models import Director


def render_names(directors: list[Director]) -> str:
    """Tiny renderer listing director names, one backend block per director."""
    return "\n".join(f"# director {d.name}" for d in directors)


@pytest.fixture
def engine() -> InMemoryEngine:
    """Empty in-memory engine with a renderer and a snapshot."""
    return InMemoryEngine(
        snapshot={"name": "cache-01", "backends": [{"ip": "10.0.0.1", "port": 8080}]},
        renderer=render_names,
    )


@pytest.fixture
def app(engine: InMemoryEngine) -> FastAPI:
    """Admin app without authentication."""
    return create_api_app(engine)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create a test client."""
    return TestClient(app)
