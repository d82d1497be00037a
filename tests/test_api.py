# tests/test_api.py
"""HTTP layer: status codes and error bodies, with services on an in-memory database."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from fastapi.testclient import TestClient
from vehicle_registry import dependencies
from vehicle_registry.database import get_db
from vehicle_registry.main import app

API = "/api/v1"


@pytest.fixture
def client(session_factory):
    services = dependencies.build_services(session_factory)

    def override_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[dependencies.get_vehicle_service] = lambda: services["vehicles"]
    app.dependency_overrides[dependencies.get_driver_service] = lambda: services["drivers"]
    app.dependency_overrides[dependencies.get_vehicle_log_service] = lambda: services["vehicle_logs"]
    app.dependency_overrides[get_db] = override_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def registered(client):
    client.post(f"{API}/vehicles", json={"number": "VIN-123", "brand": "Hyundai", "model": "Elantra"})
    client.post(f"{API}/drivers", json={"license_id": "DL-000001", "first_name": "John", "surname": "Doe"})
    return client


def log(client, log_type, mileage, vehicle="VIN-123", driver="DL-000001"):
    return client.post(f"{API}/vehicle-logs", json={
        "vehicle_number": vehicle,
        "driver_license_id": driver,
        "log_type": log_type,
        "mileage_in_kilometers": mileage,
    })


def test_root(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.text == "Vehicle Registry Server"


def test_health(client):
    resp = client.get(f"{API}/health")
    assert resp.status_code == 200
    assert resp.json()["database"] == "ok"


def test_vehicle_crud(client):
    resp = client.post(f"{API}/vehicles", json={"number": "VIN-123", "brand": "Hyundai", "model": "Elantra"})
    assert resp.status_code == 201
    assert client.post(f"{API}/vehicles", json={"number": "VIN-123", "brand": "Kia", "model": "Rio"}).status_code == 409
    assert client.get(f"{API}/vehicles/VIN-123").json()["brand"] == "Hyundai"
    assert client.put(f"{API}/vehicles/VIN-123", json={"brand": "Hyundai", "model": "Sonata"}).json()["model"] == "Sonata"
    assert client.delete(f"{API}/vehicles/VIN-123").status_code == 200
    assert client.get(f"{API}/vehicles/VIN-123").status_code == 404


def test_malformed_body_is_validation_error(client):
    resp = client.post(f"{API}/drivers", json={"license_id": "bad id!", "first_name": "John", "surname": "Doe"})
    assert resp.status_code == 400
    error = resp.json()["error"]
    assert error["type"] == "ValidationError"
    assert any(item["path"] == "license_id" for item in error["info"])


def test_unknown_body_field_rejected(registered):
    resp = registered.post(f"{API}/vehicle-logs", json={
        "vehicle_number": "VIN-123", "driver_license_id": "DL-000001",
        "log_type": "entry", "mileage_in_kilometers": 1, "timestamp": "2024-01-01T00:00:00",
    })
    assert resp.status_code == 400


def test_negative_mileage_rejected(registered):
    resp = log(registered, "entry", -1)
    assert resp.status_code == 400


def test_infinite_mileage_rejected(registered):
    # 1e309 overflows to inf when the JSON body is parsed
    raw = ('{"vehicle_number": "VIN-123", "driver_license_id": "DL-000001", '
           '"log_type": "entry", "mileage_in_kilometers": 1e309}')
    resp = registered.post(f"{API}/vehicle-logs", content=raw, headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert resp.json()["error"]["type"] == "ValidationError"
    assert registered.get(f"{API}/vehicle-logs").json() == []


def test_infinite_mileage_rejected_on_update(registered):
    log_id = log(registered, "entry", 1000).json()["id"]
    raw = '{"log_type": "exit", "mileage_in_kilometers": 1e309}'
    resp = registered.put(f"{API}/vehicle-logs/{log_id}", content=raw, headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert registered.get(f"{API}/vehicle-logs/{log_id}").json()["mileage_in_kilometers"] == 1000


def test_log_scenario_over_http(registered):
    created = log(registered, "entry", 1000)
    assert created.status_code == 201
    body = created.json()
    assert body["vehicle"] == {"number": "VIN-123", "brand": "Hyundai", "model": "Elantra"}
    assert body["driver"]["license_id"] == "DL-000001"
    assert body["log_type"] == "entry"

    repeated = log(registered, "entry", 1100)
    assert repeated.status_code == 422
    assert repeated.json()["error"]["type"] == "IncorrectValueError"

    assert log(registered, "exit", 1100).status_code == 201
    assert log(registered, "exit", 50).status_code == 422
    assert log(registered, "entry", 0).status_code == 201

    listed = registered.get(f"{API}/vehicle-logs", params={"vehicle_number": "VIN-123", "limit": 5})
    assert [item["mileage_in_kilometers"] for item in listed.json()] == [0, 1100, 1000]


def test_unknown_vehicle_is_reference_not_found(registered):
    resp = log(registered, "entry", 10, vehicle="XYZ999")
    assert resp.status_code == 404
    error = resp.json()["error"]
    assert error["type"] == "ReferenceNotFoundError"
    assert error["info"]["detail"] == "A vehicle with this number was not found."
    assert error["info"]["context"]["message"] == "Fail to create vehicle log"
    assert error["info"]["context"]["target"]["vehicle_number"] == "XYZ999"


def test_read_update_delete_log(registered):
    log_id = log(registered, "entry", 1000).json()["id"]

    assert registered.get(f"{API}/vehicle-logs/{log_id}").status_code == 200
    updated = registered.put(f"{API}/vehicle-logs/{log_id}", json={"log_type": "exit", "mileage_in_kilometers": 900})
    assert updated.json()["log_type"] == "exit"

    assert registered.delete(f"{API}/vehicle-logs/{log_id}").status_code == 200
    missing = registered.get(f"{API}/vehicle-logs/{log_id}")
    assert missing.status_code == 404
    assert missing.json() == {"error": {"type": "NotFoundError", "info": f"Vehicle Log ID not found: {log_id}"}}
    assert registered.delete(f"{API}/vehicle-logs/{log_id}").status_code == 404
