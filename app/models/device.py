"""
Device model for the monitored network inventory.
"""
from sqlalchemy import Column, Integer, String, Float
import enum

from app.core.database import Base, UTCDateTime
from app.utils.timeutil import utcnow


class DeviceType(str, enum.Enum):
    """Kinds of network device the dashboard tracks."""
    ROUTER = "router"
    SWITCH = "switch"
    ACCESS_POINT = "access_point"
    FIREWALL = "firewall"


class DeviceStatus(str, enum.Enum):
    """Operational status of a device."""
    ONLINE = "online"
    WARNING = "warning"
    OFFLINE = "offline"
    MAINTENANCE = "maintenance"


# Devices in these states produce traffic samples
ACTIVE_STATUSES = (DeviceStatus.ONLINE.value, DeviceStatus.WARNING.value)


class Device(Base):
    """Network device record."""
    __tablename__ = "devices"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String(255), nullable=False, index=True)
    type = Column(String(32), nullable=False, index=True)
    ip_address = Column(String(45), nullable=False, unique=True, index=True)  # IPv4 or IPv6
    status = Column(String(32), nullable=False, default=DeviceStatus.ONLINE.value, index=True)

    # Current and maximum throughput in MB/s
    bandwidth = Column(Float, nullable=False, default=0.0)
    max_bandwidth = Column(Float, nullable=False, default=1000.0)

    last_activity = Column(UTCDateTime(), nullable=False, default=utcnow, index=True)
    model = Column(String(255), nullable=True)
    location = Column(String(255), nullable=True)
