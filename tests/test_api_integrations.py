"""
HTTP tests for /api/integrations, /api/dashboard/stats and /api/reports/summary.
"""

import pytest


def connect(client, **body):
    payload = {"name": "Salesforce", "type": "salesforce"}
    payload.update(body)
    return client.post("/api/integrations", json=payload)


class TestIntegrations:
    def test_create_defaults(self, client):
        response = connect(client)

        assert response.status_code == 201
        data = response.json()
        assert data["id"] == 1
        assert data["isConnected"] is False
        assert data["apiKey"] is None
        assert data["lastSync"] is None
        assert data["createdAt"].startswith("2026-10-14T12:00:00")

    def test_toggle_twice(self, client):
        connect(client)

        assert client.post("/api/integrations/1/toggle").json()["isConnected"] is True
        assert client.post("/api/integrations/1/toggle").json()["isConnected"] is False

    def test_sync_stamps_last_sync(self, client, clock):
        connect(client, isConnected=True)
        clock.advance(minutes=10)

        data = client.post("/api/integrations/1/sync").json()

        assert data["lastSync"].startswith("2026-10-14T12:10:00")
        assert client.get("/api/integrations/1").json()["lastSync"] == data["lastSync"]

    def test_patch_api_key(self, client):
        connect(client)

        data = client.patch("/api/integrations/1", json={"apiKey": "sk-live-1"}).json()

        assert data["apiKey"] == "sk-live-1"
        assert data["name"] == "Salesforce"

    def test_list_and_delete(self, client):
        connect(client)
        connect(client, name="HubSpot", type="hubspot")

        assert [i["type"] for i in client.get("/api/integrations").json()] == ["salesforce", "hubspot"]
        assert client.delete("/api/integrations/1").status_code == 204
        assert [i["id"] for i in client.get("/api/integrations").json()] == [2]

    @pytest.mark.parametrize(
        "method, path",
        [
            ("get", "/api/integrations/4"),
            ("post", "/api/integrations/4/toggle"),
            ("post", "/api/integrations/4/sync"),
            ("delete", "/api/integrations/4"),
        ],
    )
    def test_unknown_integration_is_404(self, client, method, path):
        response = getattr(client, method)(path)

        assert response.status_code == 404
        assert response.json() == {"message": "Integration not found"}

    def test_missing_type_is_400(self, client):
        assert client.post("/api/integrations", json={"name": "Zoho CRM"}).status_code == 400


class TestDashboardEndpoints:
    def test_stats_on_empty_store(self, client):
        assert client.get("/api/dashboard/stats").json() == {
            "totalClients": 0,
            "pendingFollowups": 0,
            "overdueTasks": 0,
            "completedThisWeek": 0,
        }

    def test_stats_count_clients(self, client):
        client.post("/api/clients", json={"name": "Jane Doe", "email": "jane@x.com"})
        client.post("/api/clients", json={"name": "Acme Corp", "email": "info@acme.io"})

        assert client.get("/api/dashboard/stats").json()["totalClients"] == 2

    def test_report_on_empty_store(self, client):
        data = client.get("/api/reports/summary").json()

        assert data["generatedAt"].startswith("2026-10-14T12:00:00")
        assert data["clientsThisMonth"] == 0
        assert data["taskCompletionRate"] == 0
        assert data["totals"] == {"clients": 0, "tasks": 0, "followUps": 0}
        assert data["clientStatusDistribution"] == {}

    def test_report_reflects_activity(self, client):
        client.post("/api/clients", json={"name": "Jane Doe", "email": "jane@x.com", "status": "lead"})
        client.post("/api/tasks", json={"title": "a", "priority": "high"})
        client.post("/api/tasks", json={"title": "b", "priority": "high"})
        client.patch("/api/tasks/1", json={"status": "completed"})

        data = client.get("/api/reports/summary").json()

        assert data["clientsThisMonth"] == 1
        assert data["tasksCompletedThisWeek"] == 1
        assert data["clientStatusDistribution"] == {"lead": 1}
        assert data["taskPriorityDistribution"] == {"high": 2}
        assert data["taskCompletionRate"] == 50
