"""
Tests for the HTTP error mapping.
"""
from fastapi import status

from app.core.errors import StoreError
from app.main import app
from app.storage import MemoryStorage, get_storage


class FailingStorage(MemoryStorage):
    """Memory store whose device listing fails like a broken database."""

    def list_devices(self):
        raise StoreError("Failed to list devices: connection refused")


class ExplodingStorage(MemoryStorage):
    def list_devices(self):
        raise RuntimeError("unexpected bug with secret detail")


def _install(storage):
    def override_get_storage():
        yield storage

    app.dependency_overrides[get_storage] = override_get_storage


def test_non_numeric_id_is_malformed(client):
    response = client.get("/api/devices/abc")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    body = response.json()
    assert body["detail"] == "Malformed request parameters"
    assert body["errors"][0]["location"] == "path"


def test_non_positive_id_is_malformed(client):
    assert client.get("/api/devices/0").status_code == status.HTTP_400_BAD_REQUEST
    assert client.delete("/api/ids-rules/-1").status_code == status.HTTP_400_BAD_REQUEST


def test_invalid_json_body_is_400(client):
    response = client.post(
        "/api/devices",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_missing_required_fields_listed(client):
    response = client.post("/api/devices", json={"name": "Only a name"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    body = response.json()
    assert body["detail"] == "Validation failed"
    fields = {e["field"] for e in body["errors"]}
    assert {"type", "ipAddress"} <= fields


def test_missing_record_is_404(client):
    response = client.get("/api/password-entries/12345")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"detail": "Password entry with id 12345 not found"}


def test_store_failure_is_generic_500(error_client):
    _install(FailingStorage())

    response = error_client.get("/api/devices")

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    body = response.json()
    assert body["detail"] == "Internal Server Error"
    assert "connection refused" not in response.text
    assert body["trace_id"] == response.headers["X-Trace-ID"]


def test_unexpected_exception_is_generic_500(error_client):
    _install(ExplodingStorage())

    response = error_client.get("/api/devices")

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json()["detail"] == "Internal Server Error"
    assert "secret detail" not in response.text
