"""Integration tests for /health, /healthz and /metrics endpoints."""

from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from wanderai.main import app
from wanderai.models import Itinerary


@pytest.fixture
def client() -> TestClient:
    """Create test client."""
    return TestClient(app)


class TestHealthEndpoint:
    """Test /health and /healthz endpoints."""

    def test_health_always_ok(self, client: TestClient) -> None:
        """Liveness does not look at dependencies."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_healthz_in_memory_mock(self, client: TestClient) -> None:
        """Without a database or API key the app runs in memory with the mock."""
        response = client.get("/healthz")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["components"] == {"db": "in_memory", "llm": "mock"}

    @patch("wanderai.api.routes.health.check_db")
    def test_healthz_returns_503_when_db_fails(
        self, mock_check_db: MagicMock, client: TestClient
    ) -> None:
        """Test /healthz returns 503 when the DB check fails."""
        mock_check_db.return_value = (False, "error: OperationalError")

        response = client.get("/healthz")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "degraded"
        assert data["components"]["db"] == "error: OperationalError"


class TestMetricsEndpoint:
    """Test /metrics endpoint."""

    def test_metrics_exposes_app_series(self, client: TestClient) -> None:
        """Prometheus exposition includes the app's counters."""
        response = client.get("/metrics")

        assert response.status_code == 200
        assert "text/plain" in response.headers["content-type"]
        assert "share_links_total" in response.text
        assert "itinerary_generation_latency_ms" in response.text

    def test_share_link_counted(self, client: TestClient, sample_itinerary: Itinerary) -> None:
        """Creating a share link shows up in the metrics."""
        client.post("/share", json=sample_itinerary.model_dump(mode="json", by_alias=True))

        response = client.get("/metrics")

        assert 'share_links_total{payload="compact"}' in response.text


def test_root(client: TestClient) -> None:
    """Root describes the API."""
    assert client.get("/").json()["message"] == "WanderAI Itinerary API"
