"""
Tests for the mock traffic generator and sample data seeding.
"""
import random
from datetime import datetime, timedelta, timezone

import pytest
from fastapi import status

from app.core.errors import StoreError
from app.schemas.device import DeviceCreateRequest
from app.services.mock_data_service import HOURS, generate_mock_data
from app.services.sample_data_seeder import (
    SAMPLE_DEVICES,
    SAMPLE_IDS_RULES,
    SAMPLE_PASSWORD_ENTRIES,
    SAMPLE_SECURITY_EVENTS,
    ensure_sample_data_seeded,
    seed_sample_data,
)


def test_generate_mock_data_counts(client, create_device):
    create_device(ipAddress="10.0.0.1", status="online")
    create_device(ipAddress="10.0.0.2", status="warning")
    create_device(ipAddress="10.0.0.3", status="offline")
    create_device(ipAddress="10.0.0.4", status="maintenance")

    response = client.post("/api/generate-mock-data")

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["message"]
    assert body["bandwidthMetrics"] == 48
    assert body["systemMetrics"] == 24
    assert len(client.get("/api/bandwidth-metrics", params={"limit": 1000}).json()) == 48
    assert len(client.get("/api/system-metrics/history", params={"limit": 1000}).json()) == 24


def test_generate_mock_data_without_devices(client):
    body = client.post("/api/generate-mock-data").json()

    assert body["bandwidthMetrics"] == 0
    assert body["systemMetrics"] == 24


def test_generate_mock_data_appends_on_repeat(client, create_device):
    create_device()

    client.post("/api/generate-mock-data")
    client.post("/api/generate-mock-data")

    assert len(client.get("/api/system-metrics/history", params={"limit": 1000}).json()) == 48
    assert len(client.get("/api/bandwidth-metrics", params={"limit": 1000}).json()) == 48


def test_generated_values_within_ranges(storage):
    device = storage.create_device(
        DeviceCreateRequest(name="R1", type="router", ip_address="10.0.0.1")
    )
    now = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)

    generate_mock_data(storage, now=now, rng=random.Random(7))

    metrics = storage.list_bandwidth_metrics(device_id=device.id, limit=1000)
    assert len(metrics) == HOURS
    assert metrics[0].timestamp == now
    assert metrics[-1].timestamp == now - timedelta(hours=HOURS - 1)
    for metric in metrics:
        assert 0 <= metric.incoming < 3.0
        assert 0 <= metric.outgoing < 2.5

    for snapshot in storage.list_system_metrics(limit=1000):
        assert 120 <= snapshot.active_devices <= 129
        assert 0 <= snapshot.warnings <= 4
        assert 99 <= snapshot.uptime < 100
        assert 2 <= snapshot.total_bandwidth < 3


def test_hourly_snapshots_fall_inside_one_day_window(storage):
    storage.create_device(DeviceCreateRequest(name="R1", type="router", ip_address="10.0.0.1"))

    generate_mock_data(storage)

    assert len(storage.list_bandwidth_metrics(days=1, limit=1000)) == HOURS


def test_seed_sample_data_populates_empty_store(storage):
    assert seed_sample_data(storage) is True

    assert len(storage.list_devices()) == len(SAMPLE_DEVICES)
    assert len(storage.list_ids_rules()) == len(SAMPLE_IDS_RULES)
    assert len(storage.list_security_events()) == len(SAMPLE_SECURITY_EVENTS)
    assert len(storage.list_password_entries()) == len(SAMPLE_PASSWORD_ENTRIES)
    assert storage.get_latest_system_metric() is not None


def test_seed_sample_data_skips_populated_store(storage):
    seed_sample_data(storage)

    assert seed_sample_data(storage) is False
    assert len(storage.list_devices()) == len(SAMPLE_DEVICES)


def test_seeding_failure_does_not_propagate(memory_storage, monkeypatch):
    def broken_create_device(data):
        raise RuntimeError("disk full")

    monkeypatch.setattr(memory_storage, "create_device", broken_create_device)

    ensure_sample_data_seeded(memory_storage)

    assert memory_storage.list_devices() == []


def test_generation_failure_keeps_rows_already_written(memory_storage, monkeypatch):
    memory_storage.create_device(DeviceCreateRequest(name="R1", type="router", ip_address="10.0.0.1"))
    original = memory_storage.create_system_metric
    calls = []

    def flaky_create_system_metric(data, timestamp=None):
        calls.append(timestamp)
        if len(calls) == 3:
            raise StoreError("Failed to create system metric: connection reset")
        return original(data, timestamp=timestamp)

    monkeypatch.setattr(memory_storage, "create_system_metric", flaky_create_system_metric)

    with pytest.raises(StoreError):
        generate_mock_data(memory_storage)

    assert len(memory_storage.list_system_metrics(limit=100)) == 2
    assert len(memory_storage.list_bandwidth_metrics(limit=100)) == 3
