"""
Password vault and entry models.
"""
from sqlalchemy import Column, Integer, String, Text, Boolean, ForeignKey
from sqlalchemy.orm import relationship

from app.core.database import Base, UTCDateTime
from app.utils.timeutil import utcnow


class PasswordVault(Base):
    """Named collection of password entries."""
    __tablename__ = "password_vaults"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)

    created_at = Column(UTCDateTime(), nullable=False, default=utcnow, index=True)
    updated_at = Column(UTCDateTime(), nullable=False, default=utcnow)

    entries = relationship(
        "PasswordEntry",
        back_populates="vault",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class PasswordEntry(Base):
    """Credential stored in a vault; owned by exactly one vault."""
    __tablename__ = "password_entries"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    vault_id = Column(
        Integer,
        ForeignKey("password_vaults.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = Column(String(255), nullable=False)
    username = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    encrypted_password = Column(Text, nullable=False)  # ciphertext produced by the client
    website = Column(String(500), nullable=True)
    notes = Column(Text, nullable=True)
    category = Column(String(100), nullable=True, index=True)
    is_favorite = Column(Boolean, default=False, nullable=False)
    last_used = Column(UTCDateTime(), nullable=True)

    created_at = Column(UTCDateTime(), nullable=False, default=utcnow, index=True)
    updated_at = Column(UTCDateTime(), nullable=False, default=utcnow)

    vault = relationship("PasswordVault", back_populates="entries")
