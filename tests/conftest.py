"""Shared test fixtures for all test modules."""

import random
from collections.abc import AsyncGenerator
from pathlib import Path

import httpx
import pytest

from devpulse.adapters.frameworks.asgi import Scope
from devpulse.adapters.storage.initializer import create_schema, initialize
from devpulse.adapters.storage.sqlite_base import SQLiteStore
from devpulse.app import create_app
from devpulse.config import Settings


@pytest.fixture
def db_path(tmp_path: Path) -> str:
    """Provide a temporary database path."""
    return str(tmp_path / "dashboard.db")


@pytest.fixture
def rng() -> random.Random:
    """Deterministic random source."""
    return random.Random(1234)


@pytest.fixture
async def store() -> AsyncGenerator[SQLiteStore]:
    """Open in-memory store with proper cleanup."""
    store = SQLiteStore(":memory:")
    await store.open()
    yield store
    await store.close()


@pytest.fixture
async def schema_store(store: SQLiteStore) -> SQLiteStore:
    """In-memory store with the dashboard tables created but empty."""
    await create_schema(store)
    return store


@pytest.fixture
async def seeded_store(store: SQLiteStore, rng: random.Random) -> SQLiteStore:
    """In-memory store after one initialization run."""
    await initialize(store, rng)
    return store


# === ASGI Test Fixtures ===


@pytest.fixture
def basic_asgi_app():
    """Basic ASGI app fixture that returns 200 OK."""

    async def app(scope, receive, send) -> None:
        await send({"type": "http.response.start", "status": 200, "headers": []})
        await send({"type": "http.response.body", "body": b"OK"})

    return app


@pytest.fixture
def asgi_scope():
    """Factory fixture for creating ASGI scope dicts."""

    def _scope(method: str = "GET", path: str = "/test") -> Scope:
        return {
            "type": "http",
            "method": method,
            "path": path,
            "query_string": b"",
            "headers": [],
        }

    return _scope


@pytest.fixture
def asgi_send_capture():
    """Fixture that returns a send callable and a responses list for capture."""

    responses: list[dict[str, object]] = []

    async def send(message: dict[str, object]) -> None:
        responses.append(message)

    return send, responses


@pytest.fixture
def asgi_test_client():
    """Factory fixture that creates an httpx.AsyncClient for ASGI testing.

    Usage:
        async def test_something(asgi_test_client):
            async with asgi_test_client(app) as client:
                response = await client.get("/api/health")
    """

    def _get_client(app):
        return httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://test"
        )

    return _get_client


@pytest.fixture
async def api_client(db_path: str, rng: random.Random, asgi_test_client):
    """Running dashboard app on a fresh file database.

    Yields a tuple of (client, store). The app lifespan has run, so the
    store is open and seeded.
    """
    app = create_app(Settings(db_path=db_path), rng=rng)
    async with app.router.lifespan_context(app):
        async with asgi_test_client(app) as client:
            yield client, app.state.store
