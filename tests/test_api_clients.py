"""
HTTP tests for /api/clients and the app-wide error shapes.
"""

import pytest


def create(client, **body):
    payload = {"name": "Jane Doe", "email": "jane@x.com"}
    payload.update(body)
    return client.post("/api/clients", json=payload)


class TestClientRoutes:
    def test_create_returns_201_and_camel_case_record(self, client):
        response = create(client, company="Acme Corp")

        assert response.status_code == 201
        data = response.json()
        assert data["id"] == 1
        assert data["name"] == "Jane Doe"
        assert data["company"] == "Acme Corp"
        assert data["status"] == "active"
        assert data["phone"] is None
        assert data["createdAt"].startswith("2026-10-14T12:00:00")
        assert "updatedAt" in data
        assert "created_at" not in data

    def test_get_by_id(self, client):
        create(client)

        response = client.get("/api/clients/1")

        assert response.status_code == 200
        assert response.json()["email"] == "jane@x.com"

    def test_get_unknown_is_404(self, client):
        response = client.get("/api/clients/9")

        assert response.status_code == 404
        assert response.json() == {"message": "Client not found"}

    def test_non_integer_id_is_400(self, client):
        assert client.get("/api/clients/abc").status_code == 400

    def test_list_search_and_status(self, client):
        create(client, name="Acme Corp", email="info@acme.io")
        create(client, name="Jane Doe", email="jane@globex.io", status="lead")

        assert len(client.get("/api/clients").json()) == 2
        assert [c["name"] for c in client.get("/api/clients", params={"search": "ACME"}).json()] == ["Acme Corp"]
        assert [c["name"] for c in client.get("/api/clients", params={"status": "lead"}).json()] == ["Jane Doe"]

    def test_search_takes_precedence_over_status(self, client):
        create(client, name="Acme Corp", email="info@acme.io")

        response = client.get("/api/clients", params={"search": "acme", "status": "lead"})

        assert [c["name"] for c in response.json()] == ["Acme Corp"]

    def test_patch_merges_fields(self, client):
        create(client, company="Acme Corp")

        response = client.patch("/api/clients/1", json={"status": "inactive"})

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "inactive"
        assert data["company"] == "Acme Corp"
        assert data["name"] == "Jane Doe"

    def test_patch_unknown_is_404(self, client):
        response = client.patch("/api/clients/3", json={"name": "Nobody"})

        assert response.status_code == 404
        assert response.json()["message"] == "Client not found"

    def test_delete_then_delete_again(self, client):
        create(client)

        first = client.delete("/api/clients/1")
        second = client.delete("/api/clients/1")

        assert first.status_code == 204
        assert first.content == b""
        assert second.status_code == 404


class TestClientValidation:
    @pytest.mark.parametrize(
        "body",
        [
            {"name": "Jane"},  # missing email
            {"email": "jane@x.com"},  # missing name
            {"name": "Jane", "email": "not-an-email"},
            {"name": "Jane", "email": "jane@x.com", "status": "vip"},
            {"name": "Jane", "email": "jane@x.com", "website": "x.com"},  # unknown field
            {"name": "", "email": "jane@x.com"},
        ],
    )
    def test_invalid_create_is_400_and_stores_nothing(self, client, api_storage, body):
        response = client.post("/api/clients", json=body)

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid request data"
        assert response.json()["errors"]
        assert api_storage.get_all_clients() == []

    @pytest.mark.parametrize(
        "body",
        [
            {"name": None},
            {"email": None},
            {"status": None},
            {"nickname": "JD"},
        ],
    )
    def test_invalid_patch_is_400_and_changes_nothing(self, client, api_storage, body):
        create(client)
        before = api_storage.get_client(1)

        response = client.patch("/api/clients/1", json=body)

        assert response.status_code == 400
        assert api_storage.get_client(1) == before

    def test_snake_case_input_is_accepted_too(self, client):
        response = client.post(
            "/api/tasks", json={"title": "Call", "client_id": 1, "due_date": "2026-10-20T09:00:00Z"}
        )

        assert response.status_code == 201
        assert response.json()["clientId"] == 1


class TestAppSurface:
    def test_ping(self, client):
        assert client.get("/ping").json()["status"] == "ok"

    def test_request_timing_header(self, client):
        response = client.get("/api/clients")

        assert "X-Process-Time-Ms" in response.headers

    def test_requests_are_logged(self, client, caplog):
        with caplog.at_level("INFO", logger="api"):
            client.get("/api/clients")

        assert any("GET /api/clients -> 200" in r.getMessage() for r in caplog.records)

    def test_unknown_route_uses_message_shape(self, client):
        response = client.get("/api/nothing-here")

        assert response.status_code == 404
        assert "message" in response.json()

    def test_importing_main_builds_no_app(self):
        import app.main as main_module

        assert not hasattr(main_module, "app")
        assert callable(main_module.create_app)
