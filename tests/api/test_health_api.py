# tests/api/test_health_api.py


def test_health(test_client_e2e):
    response = test_client_e2e.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_database_health(test_client_e2e):
    response = test_client_e2e.get("/api/v1/health/db")
    assert response.status_code == 200
    assert response.json()["component"] == "database"


def test_root(test_client_e2e):
    assert test_client_e2e.get("/").status_code == 200
