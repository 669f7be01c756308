from fastapi.testclient import TestClient

from api.dependencies import get_provider
from api.main import app


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "OK"
    assert body["message"] == "Progress Tracker API is running"
    assert body["timestamp"]


def test_unhandled_errors_become_json(client):
    def broken_provider():
        raise RuntimeError("provider exploded")

    app.dependency_overrides[get_provider] = broken_provider
    response = TestClient(app, raise_server_exceptions=False).post(
        "/api/bugs", json={"title": "t", "description": "d", "solution": "s"}
    )

    assert response.status_code == 500
    assert response.json() == {"error": "Something went wrong!", "message": "provider exploded"}


def test_validation_errors_are_422(client):
    response = client.post("/api/reports/generate", json={"start_date": "not a date", "end_date": "2024-01-01"})
    assert response.status_code == 422
