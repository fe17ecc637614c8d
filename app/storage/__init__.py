"""
Entity store backends and the request-scoped storage dependency.
"""
from typing import Iterator

from fastapi import FastAPI, Request

from app.core.config import Settings
from app.core.database import SessionLocal
from app.storage.base import Storage
from app.storage.database import DatabaseStorage
from app.storage.memory import MemoryStorage

__all__ = [
    "Storage",
    "DatabaseStorage",
    "MemoryStorage",
    "configure_storage",
    "get_storage",
]


def configure_storage(app: FastAPI, settings: Settings) -> None:
    """
    Attach the store owned by this application instance.

    The memory backend keeps one MemoryStorage on ``app.state``; the database
    backend opens a session per request instead.
    """
    app.state.storage_backend = settings.STORAGE_BACKEND
    app.state.memory_storage = MemoryStorage() if settings.uses_memory_storage else None


def get_storage(request: Request) -> Iterator[Storage]:
    """Dependency yielding the store for the current request."""
    memory = getattr(request.app.state, "memory_storage", None)
    if memory is not None:
        yield memory
        return

    db = SessionLocal()
    try:
        yield DatabaseStorage(db)
    finally:
        db.close()
