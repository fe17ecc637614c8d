"""
Security event model for IDS alerts.
"""
from sqlalchemy import Column, Integer, String, Text
import enum

from app.core.database import Base, UTCDateTime
from app.utils.timeutil import utcnow


class Severity(str, enum.Enum):
    """Severity levels shared by events and IDS rules."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class EventStatus(str, enum.Enum):
    """Triage state of a security event."""
    NEW = "new"
    INVESTIGATING = "investigating"
    RESOLVED = "resolved"
    FALSE_POSITIVE = "false_positive"


class SecurityEvent(Base):
    """Security event raised against the network."""
    __tablename__ = "security_events"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    timestamp = Column(UTCDateTime(), nullable=False, default=utcnow, index=True)

    event_type = Column(String(100), nullable=False, index=True)  # e.g. port_scan, brute_force
    severity = Column(String(16), nullable=False, index=True)
    source_ip = Column(String(45), nullable=False)
    target_ip = Column(String(45), nullable=True)
    description = Column(Text, nullable=False)
    status = Column(String(32), nullable=False, default=EventStatus.NEW.value, index=True)

    # Weak reference to devices.id
    device_id = Column(Integer, nullable=True, index=True)
