"""Schemas for bandwidth metrics."""
from datetime import datetime
from typing import Optional
from pydantic import Field

from app.schemas.base import CamelModel


class BandwidthMetricCreateRequest(CamelModel):
    """Request schema for recording a traffic sample. The timestamp is server-assigned."""
    device_id: Optional[int] = Field(None, ge=1, description="Device the sample belongs to")
    incoming: float = Field(..., ge=0, description="Incoming traffic in GB/s")
    outgoing: float = Field(..., ge=0, description="Outgoing traffic in GB/s")


class BandwidthMetricResponse(CamelModel):
    """Response schema for a traffic sample."""
    id: int
    device_id: Optional[int] = None
    timestamp: datetime
    incoming: float
    outgoing: float
