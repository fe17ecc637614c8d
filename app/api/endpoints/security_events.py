"""
Security event endpoints.

``/security-events`` is the CRUD surface; ``/logs`` is the read-only feed the
dashboard's log viewer polls.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, Response, status

from app.core.errors import MalformedRequestError, NotFoundError
from app.schemas.security_event import (
    SecurityEventCreateRequest,
    SecurityEventResponse,
    SecurityEventUpdateRequest,
)
from app.storage import Storage, get_storage
from app.storage.base import DEFAULT_EVENT_LIMIT

logger = logging.getLogger(__name__)

router = APIRouter()
logs_router = APIRouter()


@router.get("", response_model=List[SecurityEventResponse])
def list_security_events(
    limit: int = Query(DEFAULT_EVENT_LIMIT, ge=0, description="Maximum number of events"),
    event_status: Optional[str] = Query(None, alias="status", description="Only events in this status"),
    device_id: Optional[int] = Query(None, alias="deviceId", ge=1, description="Only events for this device"),
    storage: Storage = Depends(get_storage),
):
    """
    List security events, newest first.

    Filter by status or by device, not both. An unknown status matches nothing.
    """
    if event_status is not None and device_id is not None:
        raise MalformedRequestError(
            "Filter by status or deviceId, not both",
            errors=[
                {"field": "status", "location": "query", "message": "Cannot be combined with deviceId"},
            ],
        )
    return storage.list_security_events(limit=limit, status=event_status, device_id=device_id)


@router.get("/{event_id}", response_model=SecurityEventResponse)
def get_security_event(
    event_id: int = Path(..., ge=1),
    storage: Storage = Depends(get_storage),
):
    event = storage.get_security_event(event_id)
    if event is None:
        raise NotFoundError("Security event", event_id)
    return event


@router.post("", response_model=SecurityEventResponse, status_code=status.HTTP_201_CREATED)
def create_security_event(
    request: SecurityEventCreateRequest,
    storage: Storage = Depends(get_storage),
):
    event = storage.create_security_event(request)
    logger.info(
        f"Created security event: id={event.id}, type={event.event_type}, severity={event.severity.value}"
    )
    return event


@router.put("/{event_id}", response_model=SecurityEventResponse)
def update_security_event(
    request: SecurityEventUpdateRequest,
    event_id: int = Path(..., ge=1),
    storage: Storage = Depends(get_storage),
):
    """Partially update an event, typically to move it through its status workflow."""
    event = storage.update_security_event(event_id, request)
    if event is None:
        raise NotFoundError("Security event", event_id)
    logger.info(f"Updated security event: id={event_id}, fields={sorted(request.changes())}")
    return event


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_security_event(
    event_id: int = Path(..., ge=1),
    storage: Storage = Depends(get_storage),
):
    if not storage.delete_security_event(event_id):
        raise NotFoundError("Security event", event_id)
    logger.info(f"Deleted security event: id={event_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@logs_router.get("", response_model=List[SecurityEventResponse])
def list_logs(
    limit: int = Query(DEFAULT_EVENT_LIMIT, ge=0, description="Maximum number of log lines"),
    storage: Storage = Depends(get_storage),
):
    """Newest security events for the log viewer."""
    return storage.list_security_events(limit=limit)
