"""
Tests for the application-wide error handlers.
"""
from unittest.mock import patch

from fastapi.testclient import TestClient

from stockroom.main import app


class TestErrorHandling:
    """Test cases for error responses."""

    def test_unexpected_error_is_500(self):
        client = TestClient(app, raise_server_exceptions=False)
        with patch(
            "stockroom.api.v1.endpoints.stores.store_directory.list_stores",
            side_effect=RuntimeError("boom")
        ):
            response = client.get("/api/v1/stores")

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}

    def test_invalid_json_is_400(self, client):
        response = client.post(
            "/api/v1/stores",
            content="{not json",
            headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 400

    def test_health(self, client):
        with patch("stockroom.main.check_redis_connection", return_value=True):
            response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["database"] == "connected"

    def test_health_reports_unhealthy_redis(self, client):
        with patch("stockroom.main.check_redis_connection", return_value=False):
            response = client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"
