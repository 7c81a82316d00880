"""Tests for the role and primary-admin authorization rules."""

from conftest import bearer


class TestAdminRoleRoutes:
    """Mutations on HR records need the admin role; reads need any active account."""

    def test_hr_can_read(self, client, hr_headers):
        assert client.get("/clients", headers=hr_headers).status_code == 200
        assert client.get("/teams", headers=hr_headers).status_code == 200
        assert client.get("/employees", headers=hr_headers).status_code == 200

    def test_hr_cannot_create_client(self, client, hr_headers):
        response = client.post("/clients", json={"name": "Acme"}, headers=hr_headers)
        assert response.status_code == 403
        assert response.json()["message"] == "Access denied. Admin privileges required."

    def test_secondary_admin_can_create_client(self, client, second_admin_headers):
        response = client.post("/clients", json={"name": "Acme"}, headers=second_admin_headers)
        assert response.status_code == 201

    def test_role_is_read_fresh_from_store(self, client, hr_user, db):
        # Token still says "hr" after promotion
        headers = bearer(hr_user)
        hr_user.role = "admin"
        db.commit()

        response = client.post("/clients", json={"name": "Acme"}, headers=headers)
        assert response.status_code == 201


class TestPrimaryAdminRoutes:
    """Account administration and recovery settings belong to the primary admin only."""

    def test_primary_admin_lists_users(self, client, admin_headers, hr_user):
        response = client.get("/users", headers=admin_headers)
        assert response.status_code == 200
        emails = [u["email"] for u in response.json()["data"]]
        assert "hr@hrportal.test" in emails

    def test_secondary_admin_is_refused(self, client, second_admin_headers):
        response = client.get("/users", headers=second_admin_headers)
        assert response.status_code == 403
        assert response.json()["message"] == "Access denied. Primary admin privileges required."

    def test_hr_is_refused(self, client, hr_headers):
        assert client.get("/users", headers=hr_headers).status_code == 403
        response = client.post("/auth/set-recovery-answer", json={"answer": "blue"}, headers=hr_headers)
        assert response.status_code == 403

    def test_unauthenticated_is_refused_before_body_validation(self, client):
        response = client.post("/auth/change-password", json={})
        assert response.status_code == 401
