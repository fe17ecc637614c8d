"""
System metric model (network-wide snapshots).
"""
from sqlalchemy import Column, Integer, Float

from app.core.database import Base, UTCDateTime
from app.utils.timeutil import utcnow


class SystemMetric(Base):
    """Append-only snapshot of overall network health."""
    __tablename__ = "system_metrics"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    timestamp = Column(UTCDateTime(), nullable=False, default=utcnow, index=True)
    active_devices = Column(Integer, nullable=False)
    total_bandwidth = Column(Float, nullable=False)
    warnings = Column(Integer, nullable=False)
    uptime = Column(Float, nullable=False)  # percentage
