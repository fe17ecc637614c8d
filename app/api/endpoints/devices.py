"""
Device management endpoints.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, Path, Response, status

from app.core.errors import NotFoundError
from app.schemas.device import (
    DeviceCreateRequest,
    DeviceResponse,
    DeviceStatusSummary,
    DeviceUpdateRequest,
)
from app.services.dashboard_service import summarize_device_status
from app.storage import Storage, get_storage

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[DeviceResponse])
def list_devices(storage: Storage = Depends(get_storage)):
    """List all devices, most recently active first."""
    return storage.list_devices()


@router.get("/status-summary", response_model=DeviceStatusSummary)
def device_status_summary(storage: Storage = Depends(get_storage)):
    """
    Device counts per status for the status chart.

    Declared before /{device_id} so "status-summary" is never parsed as an id.
    """
    return summarize_device_status(storage)


@router.get("/{device_id}", response_model=DeviceResponse)
def get_device(
    device_id: int = Path(..., ge=1),
    storage: Storage = Depends(get_storage),
):
    """Get a specific device by ID."""
    device = storage.get_device(device_id)
    if device is None:
        raise NotFoundError("Device", device_id)
    return device


@router.post("", response_model=DeviceResponse, status_code=status.HTTP_201_CREATED)
def create_device(
    request: DeviceCreateRequest,
    storage: Storage = Depends(get_storage),
):
    """Create a new device. The IP address must not already be in use."""
    device = storage.create_device(request)
    logger.info(f"Created device: id={device.id}, name={device.name}, ip={device.ip_address}")
    return device


@router.put("/{device_id}", response_model=DeviceResponse)
def update_device(
    request: DeviceUpdateRequest,
    device_id: int = Path(..., ge=1),
    storage: Storage = Depends(get_storage),
):
    """Partially update a device; lastActivity is refreshed on every update."""
    device = storage.update_device(device_id, request)
    if device is None:
        raise NotFoundError("Device", device_id)
    logger.info(f"Updated device: id={device_id}, fields={sorted(request.changes())}")
    return device


@router.delete("/{device_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_device(
    device_id: int = Path(..., ge=1),
    storage: Storage = Depends(get_storage),
):
    """
    Delete a device.

    Bandwidth metrics and security events referencing the device are kept.
    """
    if not storage.delete_device(device_id):
        raise NotFoundError("Device", device_id)
    logger.info(f"Deleted device: id={device_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
