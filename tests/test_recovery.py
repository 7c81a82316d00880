"""Tests for the primary-admin recovery answer and password flows."""

import pytest

from hr_portal.application.services import recovery_service
from hr_portal.application.services.auth_service import CurrentUser, verify_password
from hr_portal.core.exceptions import ConflictException, InvalidCredentialException

NEW_PASSWORD = "brand-new-pass"


def login(client, email, password):
    return client.post("/auth/login", json={"email": email, "password": password})


class TestRecoveryAnswer:
    """Setting and rotating the recovery answer."""

    def test_not_configured_initially(self, client, primary_admin):
        response = client.get("/auth/recovery-configured")
        assert response.status_code == 200
        assert response.json() == {"configured": False}

    def test_not_configured_without_admin(self, client):
        assert client.get("/auth/recovery-configured").json() == {"configured": False}

    def test_set_answer(self, client, admin_headers, db, primary_admin):
        response = client.post("/auth/set-recovery-answer", json={"answer": "  blue  "}, headers=admin_headers)
        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Recovery answer saved"}

        assert client.get("/auth/recovery-configured").json() == {"configured": True}
        db.refresh(primary_admin)
        assert verify_password("blue", primary_admin.recovery_answer_hash)

    def test_short_answer_rejected(self, client, admin_headers):
        response = client.post("/auth/set-recovery-answer", json={"answer": "xx"}, headers=admin_headers)
        assert response.status_code == 400
        assert client.get("/auth/recovery-configured").json() == {"configured": False}

    def test_set_overwrites_without_old_answer(self, client, admin_headers, db, primary_admin):
        client.post("/auth/set-recovery-answer", json={"answer": "blue"}, headers=admin_headers)
        client.post("/auth/set-recovery-answer", json={"answer": "green"}, headers=admin_headers)
        db.refresh(primary_admin)
        assert verify_password("green", primary_admin.recovery_answer_hash)

    def test_update_with_correct_old_answer(self, client, admin_headers, db, primary_admin):
        client.post("/auth/set-recovery-answer", json={"answer": "blue"}, headers=admin_headers)
        response = client.post(
            "/auth/update-recovery-answer",
            json={"old_answer": "blue", "new_answer": "green"},
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert response.json()["message"] == "Recovery answer updated"
        db.refresh(primary_admin)
        assert verify_password("green", primary_admin.recovery_answer_hash)

    def test_update_with_wrong_old_answer_keeps_hash(self, client, admin_headers, db, primary_admin):
        client.post("/auth/set-recovery-answer", json={"answer": "blue"}, headers=admin_headers)
        db.refresh(primary_admin)
        before = primary_admin.recovery_answer_hash

        response = client.post(
            "/auth/update-recovery-answer",
            json={"old_answer": "red", "new_answer": "green"},
            headers=admin_headers,
        )
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid recovery credentials"
        db.refresh(primary_admin)
        assert primary_admin.recovery_answer_hash == before

    def test_update_when_not_configured(self, client, admin_headers):
        response = client.post(
            "/auth/update-recovery-answer",
            json={"old_answer": "blue", "new_answer": "green"},
            headers=admin_headers,
        )
        assert response.status_code == 400


class TestResetAdminPassword:
    """Unauthenticated forgot-password flow."""

    def test_reset_with_correct_answer(self, client, admin_headers, db, primary_admin):
        client.post("/auth/set-recovery-answer", json={"answer": "blue"}, headers=admin_headers)
        db.refresh(primary_admin)
        answer_hash = primary_admin.recovery_answer_hash

        response = client.post(
            "/auth/reset-admin-password",
            json={"answer": "blue", "new_password": NEW_PASSWORD},
        )
        assert response.status_code == 200
        assert response.json()["success"] is True

        assert login(client, primary_admin.email, "password123").status_code == 401
        assert login(client, primary_admin.email, NEW_PASSWORD).status_code == 200

        db.refresh(primary_admin)
        assert primary_admin.recovery_answer_hash == answer_hash

    def test_wrong_answer_and_unconfigured_look_identical(self, client, admin_headers, primary_admin):
        unconfigured = client.post(
            "/auth/reset-admin-password",
            json={"answer": "blue", "new_password": NEW_PASSWORD},
        )

        client.post("/auth/set-recovery-answer", json={"answer": "blue"}, headers=admin_headers)
        wrong = client.post(
            "/auth/reset-admin-password",
            json={"answer": "red", "new_password": NEW_PASSWORD},
        )

        assert unconfigured.status_code == wrong.status_code == 401
        assert unconfigured.json() == wrong.json()
        assert login(client, primary_admin.email, "password123").status_code == 200

    def test_missing_admin_looks_identical(self, client):
        response = client.post(
            "/auth/reset-admin-password",
            json={"answer": "blue", "new_password": NEW_PASSWORD},
        )
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid recovery credentials"

    def test_short_new_password(self, client, primary_admin):
        response = client.post(
            "/auth/reset-admin-password",
            json={"answer": "blue", "new_password": "short"},
        )
        assert response.status_code == 400


class TestChangePassword:
    """Authenticated password change."""

    def test_change_password(self, client, admin_headers, primary_admin):
        response = client.post(
            "/auth/change-password",
            json={"current_password": "password123", "new_password": NEW_PASSWORD},
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert response.json()["message"] == "Password changed successfully"
        assert login(client, primary_admin.email, NEW_PASSWORD).status_code == 200

    def test_wrong_current_password(self, client, admin_headers):
        response = client.post(
            "/auth/change-password",
            json={"current_password": "not-my-password", "new_password": NEW_PASSWORD},
            headers=admin_headers,
        )
        assert response.status_code == 401
        assert response.json()["message"] == "Current password is incorrect"

    def test_old_token_survives_password_change(self, client, admin_headers):
        client.post(
            "/auth/change-password",
            json={"current_password": "password123", "new_password": NEW_PASSWORD},
            headers=admin_headers,
        )
        assert client.get("/auth/me", headers=admin_headers).status_code == 200


class TestConditionalWrites:
    """A concurrent change between verification and write is reported, not overwritten."""

    def test_lost_race_on_password_change(self, user_repo, primary_admin, monkeypatch):
        monkeypatch.setattr(user_repo, "compare_and_set_password_hash", lambda *args: False)
        actor = CurrentUser(id=primary_admin.id, email=primary_admin.email, role="admin")

        with pytest.raises(ConflictException):
            recovery_service.change_password(user_repo, actor, "password123", NEW_PASSWORD)

    def test_stale_expected_hash_is_not_applied(self, user_repo, primary_admin):
        assert not user_repo.compare_and_set_password_hash(primary_admin.id, "stale-hash", "new-hash")
        assert user_repo.compare_and_set_password_hash(primary_admin.id, primary_admin.password_hash, "new-hash")

    def test_wrong_old_answer_raises(self, user_repo, primary_admin):
        actor = CurrentUser(id=primary_admin.id, email=primary_admin.email, role="admin")
        recovery_service.set_recovery_answer(user_repo, actor, "blue")

        with pytest.raises(InvalidCredentialException):
            recovery_service.update_recovery_answer(user_repo, actor, "red", "green")


class TestResetTiming:
    """Failed resets never hash at request time."""

    def test_placeholder_hash_ready_at_import(self):
        assert recovery_service.DUMMY_ANSWER_HASH.startswith("$2")

    def test_unconfigured_reset_does_not_hash(self, user_repo, primary_admin, monkeypatch):
        def fail(_):
            raise AssertionError("hash computed during reset")

        monkeypatch.setattr(recovery_service, "hash_password", fail)
        with pytest.raises(InvalidCredentialException):
            recovery_service.reset_admin_password(user_repo, "blue", NEW_PASSWORD)
