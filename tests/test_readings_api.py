"""
Tests for energy readings and the public endpoints
"""

import pytest


class TestReadings:
    """POST/GET /api/readings"""

    def test_register_submit_and_list(self, client, register_user):
        body = register_user(email="a@b.com", password="pw123456")
        assert body["user"]["email"] == "a@b.com"
        headers = {"Authorization": f"Bearer {body['token']}"}

        saved = client.post("/api/readings", json={"power": 100.5, "energy": 0.5, "cost": 0.08}, headers=headers)

        assert saved.status_code == 200
        assert saved.json() == {"success": True, "message": "Reading saved"}

        listed = client.get("/api/readings", headers=headers)

        assert listed.status_code == 200
        readings = listed.json()["readings"]
        assert listed.json()["success"] is True
        assert len(readings) == 1
        assert readings[0]["power_w"] == pytest.approx(100.5)
        assert readings[0]["energy_wh"] == pytest.approx(0.5)
        assert readings[0]["cost"] == pytest.approx(0.08)
        assert readings[0]["user_id"] == body["user"]["id"]
        assert readings[0]["timestamp"]

    def test_client_timestamp_is_ignored(self, client, auth_headers):
        client.post(
            "/api/readings",
            json={"power": 1, "energy": 1, "cost": 1, "timestamp": "1999-01-01T00:00:00"},
            headers=auth_headers,
        )

        readings = client.get("/api/readings", headers=auth_headers).json()["readings"]

        assert not readings[0]["timestamp"].startswith("1999")

    def test_newest_first(self, client, auth_headers):
        for power in (1, 2, 3):
            client.post("/api/readings", json={"power": power, "energy": 0, "cost": 0}, headers=auth_headers)

        readings = client.get("/api/readings", headers=auth_headers).json()["readings"]

        assert [r["power_w"] for r in readings] == [3, 2, 1]

    def test_capped_at_one_hundred(self, client, auth_headers):
        for power in range(105):
            response = client.post(
                "/api/readings", json={"power": power, "energy": 0, "cost": 0}, headers=auth_headers
            )
            assert response.status_code == 200

        readings = client.get("/api/readings", headers=auth_headers).json()["readings"]

        assert len(readings) == 100
        assert readings[0]["power_w"] == 104
        assert readings[-1]["power_w"] == 5

    def test_readings_are_per_user(self, client, register_user):
        alice = register_user(email="alice@b.com")
        bob = register_user(email="bob@b.com")
        alice_headers = {"Authorization": f"Bearer {alice['token']}"}
        bob_headers = {"Authorization": f"Bearer {bob['token']}"}

        client.post("/api/readings", json={"power": 10, "energy": 1, "cost": 0.1}, headers=alice_headers)

        assert len(client.get("/api/readings", headers=alice_headers).json()["readings"]) == 1
        assert client.get("/api/readings", headers=bob_headers).json()["readings"] == []

    @pytest.mark.parametrize("payload", [
        {"energy": 0.5, "cost": 0.08},
        {"power": 100.5, "cost": 0.08},
        {"power": 100.5, "energy": 0.5},
    ])
    def test_missing_field(self, client, auth_headers, payload):
        response = client.post("/api/readings", json=payload, headers=auth_headers)

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "All fields are required"}

    def test_unparseable_body(self, client, auth_headers):
        response = client.post(
            "/api/readings",
            content=b"{not json",
            headers=dict(auth_headers, **{"Content-Type": "application/json"}),
        )

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Invalid request body"}

    def test_non_numeric_value(self, client, auth_headers):
        response = client.post(
            "/api/readings", json={"power": "lots", "energy": 0.5, "cost": 0.08}, headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Invalid request body"}


class TestPublicEndpoints:
    """/health and /"""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["service"] == "Energy Monitor API"
        assert body["version"] == "1.0.0"
        assert body["timestamp"]

    def test_root_lists_endpoints(self, client):
        response = client.get("/")

        assert response.status_code == 200
        endpoints = response.json()["endpoints"]
        assert endpoints["register"] == "POST /api/register"
        assert endpoints["submit"] == "POST /api/readings"
        assert endpoints["health"] == "GET /health"
