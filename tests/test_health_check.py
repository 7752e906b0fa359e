from unittest.mock import MagicMock

import pytest


class TestHealthCheck:
    def test_health_check_returns_200(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "timestamp" in data
        assert "services" in data

    def test_health_check_reports_database_status(self, client):
        response = client.get("/health")
        data = response.json()
        assert data["services"]["database"]["status"] == "up"
        assert "response_time_ms" in data["services"]["database"]

    def test_health_check_reports_cache_status(self, client):
        response = client.get("/health")
        data = response.json()
        assert data["services"]["cache"]["status"] == "up"
        assert "response_time_ms" in data["services"]["cache"]

    def test_cache_failure_returns_503(self, client, monkeypatch):
        broken = MagicMock()
        broken.get.return_value = None
        monkeypatch.setattr("modules.core.views.cache", broken)

        response = client.get("/health")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "unhealthy"
        assert data["services"]["cache"] == {"status": "down"}
        assert data["services"]["database"]["status"] == "up"

    @pytest.mark.parametrize("path", ["/api/schema/", "/api/docs/"])
    def test_api_docs_are_served(self, client, path):
        assert client.get(path).status_code == 200
