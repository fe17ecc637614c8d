"""Schemas for IDS rule management."""
from datetime import datetime
from typing import Optional
from pydantic import Field, field_validator

from app.models.security_event import Severity
from app.schemas.base import CamelModel, PartialUpdate, reject_null


class IdsRuleCreateRequest(CamelModel):
    """Request schema for creating an IDS rule."""
    name: str = Field(..., min_length=1, max_length=255, description="Rule name")
    description: str = Field(..., min_length=1, description="What the rule detects")
    pattern: str = Field(..., min_length=1, description="Regex or signature text")
    severity: Severity
    enabled: bool = Field(True, description="Whether rule is enabled")


class IdsRuleUpdateRequest(PartialUpdate):
    """Request schema for updating an IDS rule."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    pattern: Optional[str] = Field(None, min_length=1)
    severity: Optional[Severity] = None
    enabled: Optional[bool] = None

    @field_validator("name", "description", "pattern", "severity", "enabled", mode="before")
    @classmethod
    def validate_not_null(cls, v):
        return reject_null(v)


class IdsRuleResponse(CamelModel):
    """Response schema for an IDS rule."""
    id: int
    name: str
    description: str
    pattern: str
    severity: Severity
    enabled: bool
    created_at: datetime
    updated_at: datetime
