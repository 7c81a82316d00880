"""Tests for registration and login."""

import pytest

from hr_portal.config import get_settings


class TestRegister:
    """Account registration."""

    def test_register_defaults_to_hr(self, client):
        response = client.post("/auth/register", json={"email": "new@hrportal.test", "password": "password123"})
        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "new@hrportal.test"
        assert data["role"] == "hr"
        assert "password" not in data

    def test_duplicate_email(self, client, hr_user):
        response = client.post("/auth/register", json={"email": "hr@hrportal.test", "password": "password123"})
        assert response.status_code == 409
        assert response.json()["message"] == "User already exists"

    def test_short_password(self, client):
        response = client.post("/auth/register", json={"email": "new@hrportal.test", "password": "short"})
        assert response.status_code == 400
        assert response.json()["errors"]

    def test_invalid_email(self, client):
        response = client.post("/auth/register", json={"email": "not-an-email", "password": "password123"})
        assert response.status_code == 400

    def test_primary_admin_email_is_reserved(self, client):
        response = client.post(
            "/auth/register", json={"email": "admin@hrportal.test", "password": "password123"}
        )
        assert response.status_code == 403

    def test_registration_can_be_disabled(self, client, monkeypatch):
        monkeypatch.setattr(get_settings(), "ALLOW_OPEN_REGISTRATION", False)
        response = client.post("/auth/register", json={"email": "new@hrportal.test", "password": "password123"})
        assert response.status_code == 403


class TestLogin:
    """Credential login."""

    def test_login_success(self, client, hr_user):
        response = client.post("/auth/login", json={"email": "hr@hrportal.test", "password": "password123"})
        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["user"] == {"id": hr_user.id, "email": "hr@hrportal.test", "role": "hr"}

        me = client.get("/auth/me", headers={"Authorization": f"Bearer {data['access_token']}"})
        assert me.status_code == 200

    @pytest.mark.parametrize(
        "email,password",
        [("hr@hrportal.test", "wrong-password"), ("nobody@hrportal.test", "password123")],
    )
    def test_bad_credentials_are_indistinguishable(self, client, hr_user, email, password):
        response = client.post("/auth/login", json={"email": email, "password": password})
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"

    def test_deactivated_account(self, client, hr_user, db):
        hr_user.is_active = False
        db.commit()
        response = client.post("/auth/login", json={"email": "hr@hrportal.test", "password": "password123"})
        assert response.status_code == 403
