"""Database models."""
from app.models.device import Device
from app.models.bandwidth_metric import BandwidthMetric
from app.models.system_metric import SystemMetric
from app.models.security_event import SecurityEvent
from app.models.ids_rule import IdsRule
from app.models.password_vault import PasswordVault, PasswordEntry

__all__ = [
    "Device",
    "BandwidthMetric",
    "SystemMetric",
    "SecurityEvent",
    "IdsRule",
    "PasswordVault",
    "PasswordEntry",
]
