"""Schemas for device management."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from app.models.device import DeviceStatus, DeviceType
from app.schemas.base import CamelModel, PartialUpdate, normalize_ip, reject_null


class DeviceCreateRequest(CamelModel):
    """Request schema for creating a new device."""
    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    type: DeviceType = Field(..., description="Device type")
    ip_address: str = Field(..., description="Management IP address (unique)")
    status: DeviceStatus = Field(DeviceStatus.ONLINE, description="Operational status")
    bandwidth: float = Field(0.0, ge=0, description="Current throughput in MB/s")
    max_bandwidth: float = Field(1000.0, ge=0, description="Maximum throughput in MB/s")
    model: Optional[str] = Field(None, max_length=255, description="Hardware model")
    location: Optional[str] = Field(None, max_length=255, description="Site or room")

    @field_validator("ip_address")
    @classmethod
    def validate_ip_address(cls, v: str) -> str:
        return normalize_ip(v)


class DeviceUpdateRequest(PartialUpdate):
    """Request schema for updating a device."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    type: Optional[DeviceType] = None
    ip_address: Optional[str] = None
    status: Optional[DeviceStatus] = None
    bandwidth: Optional[float] = Field(None, ge=0)
    max_bandwidth: Optional[float] = Field(None, ge=0)
    model: Optional[str] = Field(None, max_length=255)
    location: Optional[str] = Field(None, max_length=255)

    @field_validator("name", "type", "ip_address", "status", "bandwidth", "max_bandwidth", mode="before")
    @classmethod
    def validate_not_null(cls, v):
        return reject_null(v)

    @field_validator("ip_address")
    @classmethod
    def validate_ip_address(cls, v: Optional[str]) -> Optional[str]:
        return normalize_ip(v)


class DeviceResponse(CamelModel):
    """Response schema for device."""
    id: int
    name: str
    type: DeviceType
    ip_address: str
    status: DeviceStatus
    bandwidth: float
    max_bandwidth: float
    last_activity: datetime
    model: Optional[str] = None
    location: Optional[str] = None


class DeviceStatusSummary(BaseModel):
    """Device counts per status, computed on read."""
    online: int = 0
    warning: int = 0
    offline: int = 0
    maintenance: int = 0
    total: int = 0
