"""
IDS rule model.
"""
from sqlalchemy import Column, Integer, String, Text, Boolean

from app.core.database import Base, UTCDateTime
from app.utils.timeutil import utcnow


class IdsRule(Base):
    """Intrusion detection signature."""
    __tablename__ = "ids_rules"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=False)
    pattern = Column(Text, nullable=False)  # regex or signature text
    severity = Column(String(16), nullable=False, index=True)
    enabled = Column(Boolean, default=True, nullable=False, index=True)

    created_at = Column(UTCDateTime(), nullable=False, default=utcnow, index=True)
    updated_at = Column(UTCDateTime(), nullable=False, default=utcnow)
