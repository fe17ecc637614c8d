"""Schemas for the password vault."""
from datetime import datetime
from typing import Optional
from pydantic import Field, field_validator

from app.schemas.base import CamelModel, PartialUpdate, as_utc, reject_null


class PasswordVaultCreateRequest(CamelModel):
    """Request schema for creating a vault."""
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None


class PasswordVaultUpdateRequest(PartialUpdate):
    """Request schema for updating a vault."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def validate_not_null(cls, v):
        return reject_null(v)


class PasswordVaultResponse(CamelModel):
    """Response schema for a vault."""
    id: int
    name: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class PasswordEntryCreateRequest(CamelModel):
    """Request schema for adding an entry to a vault."""
    vault_id: int = Field(..., ge=1)
    title: str = Field(..., min_length=1, max_length=255)
    username: Optional[str] = Field(None, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    encrypted_password: str = Field(..., min_length=1, description="Ciphertext; never decrypted server-side")
    website: Optional[str] = Field(None, max_length=500)
    notes: Optional[str] = None
    category: Optional[str] = Field(None, max_length=100)
    is_favorite: bool = False


class PasswordEntryUpdateRequest(PartialUpdate):
    """Request schema for updating an entry."""
    vault_id: Optional[int] = Field(None, ge=1)
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    username: Optional[str] = Field(None, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    encrypted_password: Optional[str] = Field(None, min_length=1)
    website: Optional[str] = Field(None, max_length=500)
    notes: Optional[str] = None
    category: Optional[str] = Field(None, max_length=100)
    is_favorite: Optional[bool] = None
    last_used: Optional[datetime] = None

    @field_validator("vault_id", "title", "encrypted_password", "is_favorite", mode="before")
    @classmethod
    def validate_not_null(cls, v):
        return reject_null(v)

    @field_validator("last_used")
    @classmethod
    def validate_last_used(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_utc(v)


class PasswordEntryResponse(CamelModel):
    """Response schema for an entry."""
    id: int
    vault_id: int
    title: str
    username: Optional[str] = None
    email: Optional[str] = None
    encrypted_password: str
    website: Optional[str] = None
    notes: Optional[str] = None
    category: Optional[str] = None
    is_favorite: bool
    last_used: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
