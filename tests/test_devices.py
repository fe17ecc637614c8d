"""
Tests for device endpoints.
"""
from datetime import datetime

from fastapi import status


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def test_create_and_get_device(client, create_device):
    """A created device can be read back with identical fields."""
    device = create_device()

    assert device["id"] >= 1
    assert device["name"] == "Core Router"
    assert device["type"] == "router"
    assert device["ipAddress"] == "10.0.0.1"
    assert device["maxBandwidth"] == 1000
    assert device["lastActivity"]

    response = client.get(f"/api/devices/{device['id']}")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == device


def test_create_device_applies_defaults(client):
    response = client.post(
        "/api/devices",
        json={"name": "Edge AP", "type": "access_point", "ipAddress": "10.0.0.9"},
    )

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["status"] == "online"
    assert data["bandwidth"] == 0
    assert data["maxBandwidth"] == 1000
    assert data["model"] is None


def test_list_devices_most_recently_active_first(client, create_device):
    first = create_device(ipAddress="10.0.0.1")
    second = create_device(ipAddress="10.0.0.2")

    # Touching the first device makes it the most recently active
    client.put(f"/api/devices/{first['id']}", json={"bandwidth": 5})

    ids = [d["id"] for d in client.get("/api/devices").json()]
    assert ids == [first["id"], second["id"]]


def test_duplicate_ip_address_rejected(client, create_device):
    create_device(ipAddress="10.0.0.1")

    response = client.post(
        "/api/devices",
        json={"name": "Clone", "type": "switch", "ipAddress": "10.0.0.1"},
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    body = response.json()
    assert body["errors"][0]["field"] == "ipAddress"
    assert len(client.get("/api/devices").json()) == 1


def test_update_to_duplicate_ip_address_rejected(client, create_device):
    create_device(ipAddress="10.0.0.1")
    other = create_device(ipAddress="10.0.0.2")

    response = client.put(f"/api/devices/{other['id']}", json={"ipAddress": "10.0.0.1"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert client.get(f"/api/devices/{other['id']}").json()["ipAddress"] == "10.0.0.2"


def test_partial_update_changes_only_supplied_fields(client, create_device):
    device = create_device()

    response = client.put(f"/api/devices/{device['id']}", json={"status": "warning"})

    assert response.status_code == status.HTTP_200_OK
    updated = response.json()
    assert updated["status"] == "warning"
    for field in ("name", "type", "ipAddress", "bandwidth", "maxBandwidth", "model", "location"):
        assert updated[field] == device[field]
    assert _ts(updated["lastActivity"]) > _ts(device["lastActivity"])


def test_empty_update_still_refreshes_last_activity(client, create_device):
    device = create_device()

    updated = client.put(f"/api/devices/{device['id']}", json={}).json()

    assert _ts(updated["lastActivity"]) > _ts(device["lastActivity"])
    assert updated["name"] == device["name"]


def test_update_rejects_null_for_required_field(client, create_device):
    device = create_device()

    response = client.put(f"/api/devices/{device['id']}", json={"name": None})

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_update_allows_clearing_optional_field(client, create_device):
    device = create_device()

    response = client.put(f"/api/devices/{device['id']}", json={"model": None})

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["model"] is None


def test_update_missing_device_returns_404(client):
    response = client.put("/api/devices/999", json={"name": "Ghost"})

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert "not found" in response.json()["detail"]


def test_delete_device_is_idempotent_on_absence(client, create_device):
    device = create_device()

    first = client.delete(f"/api/devices/{device['id']}")
    second = client.delete(f"/api/devices/{device['id']}")

    assert first.status_code == status.HTTP_204_NO_CONTENT
    assert first.content == b""
    assert second.status_code == status.HTTP_404_NOT_FOUND
    assert client.get(f"/api/devices/{device['id']}").status_code == status.HTTP_404_NOT_FOUND


def test_deleting_device_keeps_metrics_and_events(client, create_device):
    """Metrics and events only weakly reference their device."""
    device = create_device()
    client.post("/api/bandwidth-metrics", json={"deviceId": device["id"], "incoming": 1.0, "outgoing": 0.5})
    client.post(
        "/api/security-events",
        json={
            "eventType": "port_scan",
            "severity": "medium",
            "sourceIp": "203.0.113.7",
            "description": "Scan from outside",
            "deviceId": device["id"],
        },
    )

    assert client.delete(f"/api/devices/{device['id']}").status_code == status.HTTP_204_NO_CONTENT

    metrics = client.get("/api/bandwidth-metrics", params={"deviceId": device["id"]}).json()
    events = client.get("/api/security-events", params={"deviceId": device["id"]}).json()
    assert len(metrics) == 1
    assert len(events) == 1


def test_ids_are_not_reused_after_delete(client, create_device):
    first = create_device(ipAddress="10.0.0.1")
    client.delete(f"/api/devices/{first['id']}")

    second = create_device(ipAddress="10.0.0.2")

    assert second["id"] > first["id"]


def test_invalid_device_type_rejected(client):
    response = client.post(
        "/api/devices",
        json={"name": "Toaster", "type": "toaster", "ipAddress": "10.0.0.5"},
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Validation failed"


def test_invalid_ip_address_rejected(client):
    response = client.post(
        "/api/devices",
        json={"name": "Bad IP", "type": "switch", "ipAddress": "999.1.1.1"},
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    fields = [e["field"] for e in response.json()["errors"]]
    assert "ipAddress" in fields


def test_status_summary_counts_devices(client, create_device):
    create_device(ipAddress="10.0.0.1", status="online")
    create_device(ipAddress="10.0.0.2", status="online")
    create_device(ipAddress="10.0.0.3", status="warning")
    create_device(ipAddress="10.0.0.4", status="maintenance")

    response = client.get("/api/devices/status-summary")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "online": 2,
        "warning": 1,
        "offline": 0,
        "maintenance": 1,
        "total": 4,
    }


def test_status_summary_tracks_deletes(client, create_device):
    device = create_device()
    client.delete(f"/api/devices/{device['id']}")

    summary = client.get("/api/devices/status-summary").json()

    assert summary["total"] == 0
    assert summary["online"] == 0
