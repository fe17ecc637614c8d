"""Schemas for system metrics."""
from datetime import datetime
from pydantic import Field

from app.schemas.base import CamelModel


class SystemMetricCreateRequest(CamelModel):
    """Request schema for a system snapshot."""
    active_devices: int = Field(..., ge=0)
    total_bandwidth: float = Field(..., ge=0, description="Aggregate throughput in GB/s")
    warnings: int = Field(..., ge=0)
    uptime: float = Field(..., ge=0, le=100, description="Uptime percentage")


class SystemMetricResponse(CamelModel):
    """Response schema for a system snapshot."""
    id: int
    timestamp: datetime
    active_devices: int
    total_bandwidth: float
    warnings: int
    uptime: float
