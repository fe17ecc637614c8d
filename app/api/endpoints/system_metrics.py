"""
System metric endpoints.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, Path, Query, Response, status

from app.core.errors import NotFoundError
from app.schemas.system_metric import SystemMetricCreateRequest, SystemMetricResponse
from app.storage import Storage, get_storage
from app.storage.base import DEFAULT_HISTORY_LIMIT

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/latest", response_model=SystemMetricResponse)
def get_latest_system_metric(storage: Storage = Depends(get_storage)):
    """Most recent snapshot; 404 when none has been recorded yet."""
    metric = storage.get_latest_system_metric()
    if metric is None:
        raise NotFoundError("System metric")
    return metric


@router.get("/history", response_model=List[SystemMetricResponse])
def get_system_metric_history(
    limit: int = Query(DEFAULT_HISTORY_LIMIT, ge=0, description="Maximum number of snapshots"),
    storage: Storage = Depends(get_storage),
):
    """Recent snapshots, newest first."""
    return storage.list_system_metrics(limit=limit)


@router.get("/{metric_id}", response_model=SystemMetricResponse)
def get_system_metric(
    metric_id: int = Path(..., ge=1),
    storage: Storage = Depends(get_storage),
):
    metric = storage.get_system_metric(metric_id)
    if metric is None:
        raise NotFoundError("System metric", metric_id)
    return metric


@router.post("", response_model=SystemMetricResponse, status_code=status.HTTP_201_CREATED)
def create_system_metric(
    request: SystemMetricCreateRequest,
    storage: Storage = Depends(get_storage),
):
    metric = storage.create_system_metric(request)
    logger.info(f"Created system metric: id={metric.id}")
    return metric


@router.delete("/{metric_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_system_metric(
    metric_id: int = Path(..., ge=1),
    storage: Storage = Depends(get_storage),
):
    if not storage.delete_system_metric(metric_id):
        raise NotFoundError("System metric", metric_id)
    logger.info(f"Deleted system metric: id={metric_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
