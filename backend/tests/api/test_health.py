"""Tests for the health check endpoint."""
from collections.abc import AsyncGenerator

from fastapi import FastAPI
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from db.session import get_async_session


async def test_health_endpoint_returns_200(client: AsyncClient) -> None:
    """Test that the health endpoint returns 200 OK."""
    response = await client.get("/health")
    assert response.status_code == 200


async def test_health_endpoint_returns_healthy_status(client: AsyncClient) -> None:
    """Test that the health endpoint returns healthy status."""
    response = await client.get("/health")
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"] == "healthy"


async def test_health_endpoint_does_not_require_auth(client: AsyncClient) -> None:
    """Health is reachable without a token."""
    response = await client.get("/health")
    assert response.status_code != 401


async def test_health_endpoint_reports_database_failure(
    app: FastAPI,
    client: AsyncClient,
) -> None:
    """Test that an unreachable database yields 503 and a degraded status."""

    class BrokenSession:
        async def execute(self, *_args: object, **_kwargs: object) -> None:
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    async def override_get_async_session() -> AsyncGenerator[BrokenSession]:
        yield BrokenSession()

    app.dependency_overrides[get_async_session] = override_get_async_session

    response = await client.get("/health")

    assert response.status_code == 503
    assert response.json() == {"status": "degraded", "database": "unhealthy"}
