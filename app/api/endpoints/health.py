"""
Health check endpoint for monitoring and diagnostics.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.config import settings
from app.core.errors import StoreError
from app.storage import Storage, get_storage

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
def health_check(storage: Storage = Depends(get_storage)):
    """
    Health check endpoint that verifies:
    - API is running
    - The active store is reachable (SELECT 1 for the database backend)

    Returns 503 if the store cannot be reached.
    """
    try:
        storage.ping()
    except StoreError as e:
        logger.error(f"Storage health check failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Storage backend unavailable",
        )

    return {
        "ok": True,
        "storage": storage.backend_name,
        "environment": settings.APP_ENV,
    }
