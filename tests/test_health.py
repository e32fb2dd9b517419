"""
Health check endpoint tests.

Validates basic test infrastructure.
"""

from httpx import AsyncClient


class TestHealthCheck:
    """Tests for GET /api/v1/health."""

    async def test_health_returns_200(self, async_client: AsyncClient):
        """Health check endpoint returns 200 OK."""
        response = await async_client.get("/api/v1/health")
        assert response.status_code == 200

    async def test_health_returns_healthy_status(self, async_client: AsyncClient):
        """Health check returns status: healthy."""
        response = await async_client.get("/api/v1/health")
        data = response.json()
        assert data["status"] == "healthy"

    async def test_health_sets_request_id_header(self, async_client: AsyncClient):
        """Every response carries an X-Request-ID header."""
        response = await async_client.get("/api/v1/health")
        assert response.headers.get("X-Request-ID")
