"""
Store-level tests run against both backends.
"""
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import OperationalError

from app.core.errors import StoreError, ValidationError
from app.schemas.bandwidth_metric import BandwidthMetricCreateRequest
from app.schemas.device import DeviceCreateRequest, DeviceUpdateRequest
from app.schemas.password_vault import PasswordEntryCreateRequest, PasswordVaultCreateRequest
from app.schemas.security_event import SecurityEventCreateRequest
from app.schemas.system_metric import SystemMetricCreateRequest

NOW = datetime(2026, 5, 10, 9, 0, tzinfo=timezone.utc)


def _sample(storage, days_ago=0.0, device_id=1, timestamp=None):
    return storage.create_bandwidth_metric(
        BandwidthMetricCreateRequest(device_id=device_id, incoming=1.0, outgoing=1.0),
        timestamp=timestamp or datetime.now(timezone.utc) - timedelta(days=days_ago),
    )


def test_equal_timestamps_order_by_ascending_id(storage):
    first = _sample(storage, timestamp=NOW)
    second = _sample(storage, timestamp=NOW)
    older = _sample(storage, timestamp=NOW - timedelta(minutes=5))

    ids = [m.id for m in storage.list_bandwidth_metrics(limit=10)]

    assert ids == [first.id, second.id, older.id]


def test_limit_keeps_newest(storage):
    samples = [_sample(storage, timestamp=NOW + timedelta(seconds=i)) for i in range(10)]

    listed = storage.list_bandwidth_metrics(limit=3)

    assert [m.id for m in listed] == [s.id for s in reversed(samples)][:3]


def test_days_window_excludes_older_samples(storage):
    recent = _sample(storage, days_ago=0.5)
    _sample(storage, days_ago=3)
    _sample(storage, days_ago=10)

    assert [m.id for m in storage.list_bandwidth_metrics(days=1)] == [recent.id]
    assert len(storage.list_bandwidth_metrics(days=7)) == 2
    assert len(storage.list_bandwidth_metrics(days=30)) == 3


def test_window_applies_before_limit(storage):
    for i in range(5):
        _sample(storage, days_ago=i * 0.1)
    _sample(storage, days_ago=5)

    listed = storage.list_bandwidth_metrics(days=1, limit=100)

    assert len(listed) == 5


def test_device_and_window_filters_combine(storage):
    _sample(storage, days_ago=0.1, device_id=1)
    _sample(storage, days_ago=0.1, device_id=2)
    _sample(storage, days_ago=4, device_id=1)

    listed = storage.list_bandwidth_metrics(device_id=1, days=2)

    assert len(listed) == 1
    assert listed[0].device_id == 1


def test_system_metric_history_and_latest(storage):
    data = SystemMetricCreateRequest(active_devices=120, total_bandwidth=2.0, warnings=1, uptime=99.5)
    old = storage.create_system_metric(data, timestamp=NOW - timedelta(hours=2))
    new = storage.create_system_metric(data, timestamp=NOW)

    assert storage.get_latest_system_metric().id == new.id
    assert [m.id for m in storage.list_system_metrics()] == [new.id, old.id]


def test_timestamps_are_utc_aware(storage):
    metric = _sample(storage)

    fetched = storage.get_bandwidth_metric(metric.id)

    assert fetched.timestamp.tzinfo is not None
    assert fetched.timestamp.utcoffset() == timedelta(0)


def test_ids_never_reused(storage):
    first = _sample(storage)
    storage.delete_bandwidth_metric(first.id)

    second = _sample(storage)

    assert second.id > first.id


def test_missing_records_signal_absence(storage):
    assert storage.get_device(1) is None
    assert storage.update_device(1, DeviceUpdateRequest(name="x")) is None
    assert storage.delete_device(1) is False
    assert storage.delete_password_vault(1) is False


def test_duplicate_ip_raises_validation_error(storage):
    storage.create_device(DeviceCreateRequest(name="A", type="router", ip_address="10.1.1.1"))

    with pytest.raises(ValidationError):
        storage.create_device(DeviceCreateRequest(name="B", type="switch", ip_address="10.1.1.1"))

    assert len(storage.list_devices()) == 1


def test_vault_delete_removes_only_its_entries(storage):
    doomed = storage.create_password_vault(PasswordVaultCreateRequest(name="Doomed"))
    kept = storage.create_password_vault(PasswordVaultCreateRequest(name="Kept"))
    for title in ("a", "b"):
        storage.create_password_entry(
            PasswordEntryCreateRequest(vault_id=doomed.id, title=title, encrypted_password="x")
        )
    survivor = storage.create_password_entry(
        PasswordEntryCreateRequest(vault_id=kept.id, title="c", encrypted_password="x")
    )

    assert storage.delete_password_vault(doomed.id) is True

    assert storage.list_password_entries(vault_id=doomed.id) == []
    assert [e.id for e in storage.list_password_entries()] == [survivor.id]


def test_security_event_status_compared_as_text(storage):
    storage.create_security_event(
        SecurityEventCreateRequest(
            event_type="port_scan", severity="low", source_ip="192.0.2.1", description="scan"
        )
    )

    assert len(storage.list_security_events(status="new")) == 1
    assert storage.list_security_events(status="NEW") == []
    assert storage.list_security_events(status="nonsense") == []


def test_database_failure_raises_store_error_and_rolls_back(database_storage, monkeypatch):
    def broken_commit():
        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(database_storage.db, "commit", broken_commit)

    with pytest.raises(StoreError):
        database_storage.create_device(DeviceCreateRequest(name="A", type="router", ip_address="10.9.9.9"))

    monkeypatch.undo()
    assert database_storage.list_devices() == []


def test_memory_store_returns_copies(memory_storage):
    device = memory_storage.create_device(DeviceCreateRequest(name="A", type="router", ip_address="10.0.0.1"))

    device.name = "mutated"

    assert memory_storage.get_device(device.id).name == "A"


def test_failed_vault_delete_keeps_vault_and_entries(database_storage, monkeypatch):
    vault = database_storage.create_password_vault(PasswordVaultCreateRequest(name="Core"))
    for title in ("router", "switch"):
        database_storage.create_password_entry(
            PasswordEntryCreateRequest(vault_id=vault.id, title=title, encrypted_password="x")
        )

    def broken_commit():
        raise OperationalError("COMMIT", {}, Exception("database is locked"))

    monkeypatch.setattr(database_storage.db, "commit", broken_commit)

    with pytest.raises(StoreError):
        database_storage.delete_password_vault(vault.id)

    monkeypatch.undo()
    assert database_storage.get_password_vault(vault.id) is not None
    assert len(database_storage.list_password_entries(vault_id=vault.id)) == 2
