"""
API tests through FastAPI's TestClient with the dashboard service overridden.
"""
import pytest
from fastapi.testclient import TestClient

from app.dependencies import get_dashboard_service
from app.main import app


@pytest.fixture
def client(service):
    app.dependency_overrides[get_dashboard_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealth:

    def test_health_before_load(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["records_loaded"] == 0
        assert data["last_loaded_at"] is None

    def test_health_degraded_after_failed_load(self, client, fake_client):
        fake_client.failing.add("fetch_device_records")
        client.post("/api/dashboard/reload")
        assert client.get("/health").json()["status"] == "degraded"

    def test_root(self, client):
        assert "endpoints" in client.get("/").json()


class TestDashboardEndpoints:

    def test_reload(self, client):
        response = client.post("/api/dashboard/reload")
        assert response.status_code == 200
        data = response.json()
        assert data["records_loaded"] == 2
        assert data["test_devices_excluded"] == 1

    def test_metrics(self, client):
        response = client.get("/api/dashboard/metrics", params={"start_date": "2024-01-01", "end_date": "2024-01-31"})
        assert response.status_code == 200
        data = response.json()
        assert data["registered"] == 2
        assert data["delinked"] == 2
        assert data["generated"] == 9
        assert data["org_types"]["counts"]["school"] == 1
        assert data["by_source"] == {"ifp": 1, "web": 1, "mobile": 0, "other": 0}

    def test_metrics_default_window(self, client):
        response = client.get("/api/dashboard/metrics")
        assert response.status_code == 200
        assert response.json()["registered"] == 2

    def test_metrics_rejects_inverted_range(self, client):
        response = client.get("/api/dashboard/metrics", params={"start_date": "2024-02-01", "end_date": "2024-01-01"})
        assert response.status_code == 400
        assert "after" in response.json()["error"]

    def test_metrics_rejects_bad_date(self, client):
        response = client.get("/api/dashboard/metrics", params={"start_date": "yesterday"})
        assert response.status_code == 422


class TestGeoEndpoints:

    def test_distribution(self, client):
        data = client.get("/api/geo/distribution").json()
        assert data["by_country"] == {"India": 2}
        assert data["by_indian_state"] == {"Delhi": 1, "Maharashtra": 1}
        assert set(data["by_city"]) == {"New Delhi", "Mumbai"}

    def test_distribution_rejects_inverted_range(self, client):
        response = client.get("/api/geo/distribution", params={"start_date": "2024-02-01", "end_date": "2024-01-01"})
        assert response.status_code == 400

    def test_active_devices(self, client):
        data = client.get("/api/geo/active-devices").json()
        assert data["total_devices"] == 8
        assert data["total_locations"] == 3
        assert data["state_totals"][0] == {"state": "Delhi", "count": 4}

    def test_pincode_exact(self, client):
        data = client.get("/api/geo/pincode/110001").json()
        assert data["resolved"] is True
        assert data["location"]["state"] == "Delhi"
        assert data["location"]["precision"] == "exact"

    def test_pincode_invalid(self, client):
        data = client.get("/api/geo/pincode/12ab").json()
        assert data == {"pincode": "12ab", "resolved": False, "location": None}

    def test_state_centroids(self, client):
        data = client.get("/api/geo/centroids/states").json()
        delhi = next(c for c in data if c["name"] == "Delhi")
        assert delhi["lat"] == pytest.approx(28.7041, abs=0.5)


class TestDeviceEndpoints:

    def test_lock(self, client, service):
        service.load()
        response = client.post("/api/devices/SN-0001/lock", json={"is_locked": True})
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["records_patched"] == 1

    def test_lock_failure_returns_502(self, client, fake_client):
        fake_client.failing.add("set_lock_state")
        response = client.post("/api/devices/SN-0001/lock", json={"is_locked": False})
        assert response.status_code == 502
        data = response.json()
        assert data["success"] is False
        assert data["message"].startswith("Failed to unlock device SN-0001")

    def test_lock_requires_body(self, client):
        assert client.post("/api/devices/SN-0001/lock", json={}).status_code == 422
