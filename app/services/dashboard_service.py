"""
Derived dashboard views computed from the query layer on every call.
"""
from app.models.device import DeviceStatus
from app.schemas.device import DeviceStatusSummary
from app.storage.base import Storage


def summarize_device_status(storage: Storage) -> DeviceStatusSummary:
    """Count devices per status. Nothing is cached, so counts never drift from the store."""
    counts = {status.value: 0 for status in DeviceStatus}
    devices = storage.list_devices()
    for device in devices:
        counts[device.status.value] += 1
    return DeviceStatusSummary(total=len(devices), **counts)
