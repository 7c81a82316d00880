"""Tests for error rendering and the service endpoints."""

import pytest
from fastapi import APIRouter
from fastapi.testclient import TestClient

from hr_portal.config import get_settings
from hr_portal.core.exceptions import AppError
from hr_portal.main import app

boom_router = APIRouter()


@boom_router.get("/__boom")
def boom():
    raise RuntimeError("database password is hunter2")


@boom_router.get("/__detailed")
def detailed():
    raise AppError(
        "Real message",
        status_code=418,
        details={"message": "overridden", "code": "Spoofed", "path": "/elsewhere", "hint": "kept"},
    )


app.include_router(boom_router)


@pytest.fixture
def quiet_client():
    return TestClient(app, raise_server_exceptions=False)


class TestServiceEndpoints:
    """Root and health endpoints."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_root(self, client):
        assert client.get("/").json()["name"] == "HR Portal API"

    def test_request_id_header(self, client):
        response = client.get("/health", headers={"X-Request-ID": "3fa85f64-5717-4562-b3fc-2c963f66afa6"})
        assert response.headers["X-Request-ID"] == "3fa85f64-5717-4562-b3fc-2c963f66afa6"


class TestErrorBodies:
    """Failures render as a JSON body with a human-readable message."""

    def test_validation_error_lists_fields(self, client):
        response = client.post("/auth/login", json={"email": "a@b.co"})
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Validation failed"
        assert any(error.startswith("password") for error in body["errors"])

    def test_unexpected_error_hidden_in_production(self, quiet_client, monkeypatch):
        monkeypatch.setattr(get_settings(), "ENVIRONMENT", "production")
        response = quiet_client.get("/__boom")
        assert response.status_code == 500
        body = response.json()
        assert body["message"] == "An unexpected error occurred. Please try again later."
        assert "error" not in body
        assert "hunter2" not in response.text

    def test_unexpected_error_detail_in_development(self, quiet_client, monkeypatch):
        monkeypatch.setattr(get_settings(), "ENVIRONMENT", "development")
        response = quiet_client.get("/__boom")
        assert response.status_code == 500
        assert response.json()["error"] == "database password is hunter2"

    def test_details_cannot_replace_fixed_fields(self, client):
        response = client.get("/__detailed")
        assert response.status_code == 418
        assert response.json() == {
            "success": False,
            "message": "Real message",
            "code": "AppError",
            "path": "/__detailed",
            "hint": "kept",
        }
