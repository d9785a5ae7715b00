"""Tests for health endpoints and request-scoped database dependencies."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.dependencies import get_database, get_db
from app.main import app


class FakeDatabase:
    """Connection handle double with a switchable health status."""

    def __init__(self, healthy: bool = True):
        self.healthy = healthy
        self.transactions: list[str] = []

    async def check_connection(self) -> bool:
        return self.healthy

    @asynccontextmanager
    async def transaction(self):
        self.transactions.append("begin")
        try:
            yield "session"
        except Exception:
            self.transactions.append("rollback")
            raise
        self.transactions.append("commit")


@pytest_asyncio.fixture
async def client_factory():
    """Create a test HTTP client bound to a given fake database."""
    clients = []

    async def _make(database: FakeDatabase) -> AsyncClient:
        app.dependency_overrides[get_database] = lambda: database
        client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        clients.append(client)
        return client

    yield _make

    for client in clients:
        await client.aclose()
    app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_root(client_factory):
    """Root endpoint returns a welcome message."""
    client = await client_factory(FakeDatabase())

    response = await client.get("/")

    assert response.status_code == 200
    assert response.json()["docs"] == "/docs"


@pytest.mark.asyncio
async def test_health(client_factory):
    """Basic health check does not touch the database."""
    client = await client_factory(FakeDatabase(healthy=False))

    response = await client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert "database" not in response.json()
    assert "X-Request-ID" in response.headers


@pytest.mark.asyncio
async def test_detailed_health_reports_database(client_factory):
    """Detailed health reflects the database check."""
    client = await client_factory(FakeDatabase(healthy=True))

    response = await client.get("/api/v1/health/detailed")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["database"] == "healthy"


@pytest.mark.asyncio
async def test_detailed_health_degraded(client_factory):
    """An unreachable database degrades the status but still answers 200."""
    client = await client_factory(FakeDatabase(healthy=False))

    response = await client.get("/api/v1/health/detailed")

    assert response.status_code == 200
    assert response.json()["status"] == "degraded"
    assert response.json()["database"] == "unhealthy"


@pytest.mark.asyncio
async def test_health_echoes_request_id(client_factory):
    """A caller-supplied request ID is returned unchanged."""
    client = await client_factory(FakeDatabase())

    response = await client.get("/api/v1/health", headers={"X-Request-ID": "abc123"})

    assert response.status_code == 200
    assert response.headers["X-Request-ID"] == "abc123"


@pytest.mark.asyncio
async def test_ping_is_not_routed(client_factory):
    """Only the two health endpoints are exposed under the API prefix."""
    client = await client_factory(FakeDatabase())

    response = await client.get("/api/v1/ping")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_get_db_commits_after_request():
    """The per-request session is committed when the handler returns."""
    database = FakeDatabase()
    dependency: AsyncGenerator = get_db(database)  # type: ignore[arg-type]

    assert await dependency.__anext__() == "session"
    with pytest.raises(StopAsyncIteration):
        await dependency.__anext__()

    assert database.transactions == ["begin", "commit"]


@pytest.mark.asyncio
async def test_get_db_rolls_back_on_error():
    """An exception in the handler rolls the per-request transaction back."""
    database = FakeDatabase()
    dependency: AsyncGenerator = get_db(database)  # type: ignore[arg-type]

    await dependency.__anext__()
    with pytest.raises(ValueError):
        await dependency.athrow(ValueError("handler failed"))

    assert database.transactions == ["begin", "rollback"]
