"""Tests for client endpoints."""


def create_client(client, headers, **fields):
    payload = {"name": "Acme Corp", **fields}
    response = client.post("/clients", json=payload, headers=headers)
    assert response.status_code == 201, response.json()
    return response.json()["data"]


class TestClientCrud:
    """Create, read, update and delete clients."""

    def test_create_and_fetch(self, client, admin_headers, hr_headers):
        created = create_client(
            client,
            admin_headers,
            poc_internal_name="  Priya  ",
            poc_external_email="ops@acme.test",
            address="",
        )
        assert created["poc_internal_name"] == "Priya"
        assert created["address"] is None
        assert created["team_count"] == 0

        response = client.get(f"/clients/{created['id']}", headers=hr_headers)
        assert response.status_code == 200
        detail = response.json()["data"]
        assert detail["name"] == "Acme Corp"
        assert detail["teams"] == []
        assert detail["employees"] == []

    def test_blank_name_rejected(self, client, admin_headers):
        response = client.post("/clients", json={"name": "   "}, headers=admin_headers)
        assert response.status_code == 400

    def test_invalid_poc_email_rejected(self, client, admin_headers):
        response = client.post(
            "/clients", json={"name": "Acme", "poc_internal_email": "nope"}, headers=admin_headers
        )
        assert response.status_code == 400

    def test_duplicate_name(self, client, admin_headers):
        create_client(client, admin_headers)
        response = client.post("/clients", json={"name": "Acme Corp"}, headers=admin_headers)
        assert response.status_code == 409
        assert response.json()["message"] == "Client name already exists"

    def test_missing_client(self, client, hr_headers):
        response = client.get("/clients/9999", headers=hr_headers)
        assert response.status_code == 404
        assert response.json()["message"] == "Client not found"

    def test_partial_update(self, client, admin_headers):
        created = create_client(client, admin_headers, address="1 Main St")
        response = client.put(
            f"/clients/{created['id']}", json={"poc_internal_name": "Ravi"}, headers=admin_headers
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["poc_internal_name"] == "Ravi"
        assert data["address"] == "1 Main St"
        assert data["name"] == "Acme Corp"

    def test_search(self, client, admin_headers, hr_headers):
        create_client(client, admin_headers, name="Globex")
        create_client(client, admin_headers, name="Initech", address="Austin")

        response = client.get("/clients", params={"search": "aus"}, headers=hr_headers)
        names = [c["name"] for c in response.json()["data"]]
        assert names == ["Initech"]

    def test_delete_empty_client(self, client, admin_headers):
        created = create_client(client, admin_headers)
        response = client.delete(f"/clients/{created['id']}", headers=admin_headers)
        assert response.status_code == 200
        assert client.get(f"/clients/{created['id']}", headers=admin_headers).status_code == 404

    def test_delete_client_with_teams_refused(self, client, admin_headers):
        created = create_client(client, admin_headers)
        client.post("/teams", json={"name": "Platform", "client_id": created["id"]}, headers=admin_headers)

        response = client.delete(f"/clients/{created['id']}", headers=admin_headers)
        assert response.status_code == 409
        assert "1 team(s)" in response.json()["message"]


class TestClientRelations:
    """Teams and employees belonging to a client."""

    def test_client_teams_and_employees(self, client, admin_headers, hr_headers):
        created = create_client(client, admin_headers)
        client.post("/teams", json={"name": "Platform", "client_id": created["id"]}, headers=admin_headers)
        client.post(
            "/employees",
            json={
                "first_name": "Asha",
                "last_name": "Rao",
                "company_email": "asha@acme.test",
                "client_id": created["id"],
            },
            headers=admin_headers,
        )

        teams = client.get(f"/clients/{created['id']}/teams", headers=hr_headers).json()
        assert [t["name"] for t in teams["data"]] == ["Platform"]
        assert teams["client"]["name"] == "Acme Corp"

        employees = client.get(f"/clients/{created['id']}/employees", headers=hr_headers).json()
        assert [e["email"] for e in employees["data"]] == ["asha@acme.test"]

        listed = client.get("/clients", headers=hr_headers).json()["data"][0]
        assert listed["team_count"] == 1
        assert listed["employee_count"] == 1


class TestClientSearchEscaping:
    """Wildcard characters typed into search match literally."""

    def test_percent_and_underscore_are_literal(self, client, admin_headers, hr_headers):
        create_client(client, admin_headers, name="Globex")
        create_client(client, admin_headers, name="100% Solar")
        create_client(client, admin_headers, name="north_wind")

        def names(term):
            response = client.get("/clients", params={"search": term}, headers=hr_headers)
            return [c["name"] for c in response.json()["data"]]

        assert names("%") == ["100% Solar"]
        assert names("_") == ["north_wind"]
        assert names("h_w") == ["north_wind"]
        assert names("o_e") == []
