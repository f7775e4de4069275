"""Tests for the /health endpoint."""

from unittest import mock

import pytest
from django.db import OperationalError

pytestmark = pytest.mark.integration


class TestHealthCheck:
    def test_healthy_database_returns_200(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["timestamp"]
        assert data["services"]["database"]["status"] == "up"
        assert "response_time_ms" in data["services"]["database"]

    def test_reports_database_only(self, client):
        data = client.get("/health").json()
        assert set(data["services"]) == {"database"}

    def test_is_public(self, api_client):
        assert api_client.get("/health").status_code == 200

    def test_database_down_returns_503(self, client):
        with mock.patch("modules.core.views.connections") as connections:
            connections.__getitem__.side_effect = OperationalError("connection refused")
            response = client.get("/health")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "unhealthy"
        assert data["services"]["database"] == {"status": "down"}
