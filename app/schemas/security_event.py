"""Schemas for security events."""
from datetime import datetime
from typing import Optional
from pydantic import Field, field_validator

from app.models.security_event import EventStatus, Severity
from app.schemas.base import CamelModel, PartialUpdate, normalize_ip, reject_null


class SecurityEventCreateRequest(CamelModel):
    """Request schema for raising a security event."""
    event_type: str = Field(..., min_length=1, max_length=100, description="e.g. port_scan, brute_force")
    severity: Severity
    source_ip: str
    target_ip: Optional[str] = None
    description: str = Field(..., min_length=1)
    status: EventStatus = EventStatus.NEW
    device_id: Optional[int] = Field(None, ge=1)

    @field_validator("source_ip", "target_ip")
    @classmethod
    def validate_ips(cls, v: Optional[str]) -> Optional[str]:
        return normalize_ip(v)


class SecurityEventUpdateRequest(PartialUpdate):
    """Request schema for updating a security event. The timestamp is immutable."""
    event_type: Optional[str] = Field(None, min_length=1, max_length=100)
    severity: Optional[Severity] = None
    source_ip: Optional[str] = None
    target_ip: Optional[str] = None
    description: Optional[str] = Field(None, min_length=1)
    status: Optional[EventStatus] = None
    device_id: Optional[int] = Field(None, ge=1)

    @field_validator("event_type", "severity", "source_ip", "description", "status", mode="before")
    @classmethod
    def validate_not_null(cls, v):
        return reject_null(v)

    @field_validator("source_ip", "target_ip")
    @classmethod
    def validate_ips(cls, v: Optional[str]) -> Optional[str]:
        return normalize_ip(v)


class SecurityEventResponse(CamelModel):
    """Response schema for a security event."""
    id: int
    timestamp: datetime
    event_type: str
    severity: Severity
    source_ip: str
    target_ip: Optional[str] = None
    description: str
    status: EventStatus
    device_id: Optional[int] = None
