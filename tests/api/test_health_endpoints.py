"""
Tests for Health Check endpoints.
"""
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from backend.api import health
from backend.api.health import ComponentHealth, HealthStatus, determine_overall_status


def component(status: HealthStatus) -> ComponentHealth:
    return ComponentHealth(status=status)


class TestDetermineOverallStatus:
    """Tests for status aggregation."""

    def test_all_healthy(self):
        components = {"redis": component(HealthStatus.HEALTHY), "email": component(HealthStatus.HEALTHY)}
        assert determine_overall_status(components) == HealthStatus.HEALTHY

    def test_degraded_wins_over_healthy(self):
        components = {"redis": component(HealthStatus.DEGRADED), "email": component(HealthStatus.HEALTHY)}
        assert determine_overall_status(components) == HealthStatus.DEGRADED

    def test_unhealthy_wins(self):
        components = {"redis": component(HealthStatus.DEGRADED), "email": component(HealthStatus.UNHEALTHY)}
        assert determine_overall_status(components) == HealthStatus.UNHEALTHY


class TestProbes:
    """Tests for the liveness and startup probes."""

    @pytest.mark.asyncio
    async def test_liveness(self, client):
        response = await client.get("/health/live")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    @pytest.mark.asyncio
    async def test_startup_before_complete(self, client, monkeypatch):
        monkeypatch.setattr(health, "_startup_time", None)

        response = await client.get("/health/startup")

        assert response.status_code == 503
        assert response.json()["status"] == "starting"

    @pytest.mark.asyncio
    async def test_startup_after_complete(self, client, monkeypatch):
        monkeypatch.setattr(health, "_startup_time", None)
        health.mark_startup_complete()

        response = await client.get("/health/startup")

        assert response.status_code == 200
        assert response.json()["status"] == "started"


class TestReadiness:
    """Tests for GET /health."""

    @pytest.mark.asyncio
    async def test_degraded_still_200(self, client):
        with patch.object(health, "check_redis", AsyncMock(return_value=component(HealthStatus.DEGRADED))), \
             patch.object(health, "check_email", AsyncMock(return_value=component(HealthStatus.HEALTHY))):
            response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "degraded"
        assert data["components"]["redis"]["status"] == "degraded"

    @pytest.mark.asyncio
    async def test_unhealthy_503(self, client):
        with patch.object(health, "check_redis", AsyncMock(return_value=component(HealthStatus.UNHEALTHY))), \
             patch.object(health, "check_email", AsyncMock(return_value=component(HealthStatus.HEALTHY))):
            response = await client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"

    @pytest.mark.asyncio
    async def test_email_degraded_without_api_key(self):
        from backend.core.config import settings

        with patch.object(settings, "sendgrid_api_key", None):
            result = await health.check_email()

        assert result.status == HealthStatus.DEGRADED

    @pytest.mark.asyncio
    async def test_redis_failure_is_degraded(self):
        redis_client = AsyncMock()
        redis_client.ping.side_effect = ConnectionError("refused")
        limiter = MagicMock()
        limiter.get_redis = AsyncMock(return_value=redis_client)

        with patch.object(health, "get_rate_limiter", return_value=limiter):
            result = await health.check_redis()

        assert result.status == HealthStatus.DEGRADED
        assert "refused" in result.message

    @pytest.mark.asyncio
    async def test_redis_reachable_is_healthy(self):
        limiter = MagicMock()
        limiter.get_redis = AsyncMock(return_value=AsyncMock())

        with patch.object(health, "get_rate_limiter", return_value=limiter):
            result = await health.check_redis()

        assert result.status == HealthStatus.HEALTHY
