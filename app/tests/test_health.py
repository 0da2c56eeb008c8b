"""
Tests for health and version endpoints
"""


def test_health_endpoint(client):
    """Test health endpoint returns correct response"""
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    data = response.json()

    assert data["status"] == "ok"
    assert data["service"] == "leave-engine-backend"


def test_version_endpoint_reports_cap(client):
    response = client.get("/api/v1/version")

    assert response.status_code == 200
    data = response.json()
    assert data["service"] == "leave-engine-backend"
    assert data["monthly_paid_leave_cap"] == 1.5
