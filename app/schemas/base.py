"""Shared schema base classes and field helpers."""
import ipaddress
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base model for API payloads.

    Python attributes are snake_case; the JSON wire format is camelCase.
    Either spelling is accepted on input.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PartialUpdate(CamelModel):
    """Base for update payloads: only fields present in the request change."""

    def changes(self) -> Dict[str, Any]:
        """Fields explicitly supplied by the caller, keyed by attribute name."""
        return self.model_dump(exclude_unset=True)


def normalize_ip(value: Optional[str]) -> Optional[str]:
    """Validate an IPv4/IPv6 address and return its canonical text form."""
    if value is None:
        return None
    try:
        return str(ipaddress.ip_address(str(value).strip()))
    except ValueError:
        raise ValueError("must be a valid IPv4 or IPv6 address")


def reject_null(value: Any) -> Any:
    """Partial updates may omit a required field but not null it out."""
    if value is None:
        raise ValueError("cannot be null")
    return value


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
