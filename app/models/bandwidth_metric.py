"""
Bandwidth metric model (per-device traffic samples).
"""
from sqlalchemy import Column, Integer, Float

from app.core.database import Base, UTCDateTime
from app.utils.timeutil import utcnow


class BandwidthMetric(Base):
    """Immutable traffic sample, in GB/s."""
    __tablename__ = "bandwidth_metrics"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    # Weak reference: no foreign key so history survives device deletion
    device_id = Column(Integer, nullable=True, index=True)
    timestamp = Column(UTCDateTime(), nullable=False, default=utcnow, index=True)
    incoming = Column(Float, nullable=False)
    outgoing = Column(Float, nullable=False)
