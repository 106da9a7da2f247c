"""
App-level behaviour: probes, startup without a database, and the global
rate limit.
"""

import pytest
from fastapi.testclient import TestClient

from employee_api.core.config import settings
from employee_api.main import app

pytestmark = pytest.mark.integration

RATE_LIMIT_MESSAGE = "Too many requests from this IP, Try again Later."


def test_health_check_returns_200(client):
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["service"] == "employee-api"
    assert "version" in body


def test_ready_when_database_reachable(client):
    response = client.get("/ready")
    assert response.status_code == 200
    assert response.json()["status"] == "ready"


def test_startup_survives_unreachable_database(monkeypatch, tmp_path):
    missing = tmp_path / "missing-dir" / "employee.db"
    monkeypatch.setattr(settings, "DATABASE_URL", f"sqlite+aiosqlite:///{missing}")

    with TestClient(app) as test_client:
        assert test_client.get("/health").status_code == 200
        assert test_client.get("/ready").status_code == 503

        response = test_client.get("/employee")
        assert response.status_code == 500
        assert response.text == "Error occurred"


def test_101st_request_is_rejected(client, rate_limited):
    for _ in range(100):
        assert client.get("/health").status_code == 200

    response = client.get("/health")
    assert response.status_code == 429
    assert response.text == RATE_LIMIT_MESSAGE


def test_rate_limit_is_shared_across_routes(client, rate_limited):
    for _ in range(40):
        assert client.get("/employee").status_code == 200
    for _ in range(40):
        assert client.get("/employee/search/Q").status_code == 404
    for _ in range(20):
        assert client.get("/health").status_code == 200

    # Rejected before validation runs
    response = client.post("/employee/create", json={"fname": "A1"})
    assert response.status_code == 429
    assert response.text == RATE_LIMIT_MESSAGE

    assert client.get("/employee").status_code == 429
    assert client.get("/employee/search/Q").status_code == 429
    assert client.put("/employee/users/1", json={"fname": "A1"}).status_code == 429
    assert client.delete("/employee/delete/1").status_code == 429
    assert client.get("/ready").status_code == 429


def test_every_employee_route_counts_against_the_limit(client, rate_limited):
    payload = {"fname": "Jane", "lname": "Doe", "age": 30, "gender": "Female", "role": "Dev"}
    for _ in range(25):
        assert client.post("/employee/create", json=payload).status_code == 201
    for _ in range(25):
        assert client.put("/employee/users/999999", json=payload).status_code == 404
    for _ in range(25):
        assert client.delete("/employee/delete/999999").status_code == 404
    for _ in range(25):
        assert client.get("/employee/search/J").status_code == 200

    response = client.get("/health")
    assert response.status_code == 429
    assert response.text == RATE_LIMIT_MESSAGE


def test_disabled_limiter_never_rejects(client):
    for _ in range(120):
        assert client.get("/health").status_code == 200
