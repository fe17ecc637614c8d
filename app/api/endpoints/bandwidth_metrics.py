"""
Bandwidth metric endpoints.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, Response, status

from app.core.errors import NotFoundError
from app.schemas.bandwidth_metric import BandwidthMetricCreateRequest, BandwidthMetricResponse
from app.storage import Storage, get_storage

logger = logging.getLogger(__name__)

router = APIRouter()

DEFAULT_LIMIT = 100


@router.get("", response_model=List[BandwidthMetricResponse])
def list_bandwidth_metrics(
    device_id: Optional[int] = Query(None, alias="deviceId", ge=1, description="Filter by device"),
    limit: int = Query(DEFAULT_LIMIT, ge=0, description="Maximum number of samples to return"),
    days: Optional[int] = Query(None, ge=1, le=3650, description="Only samples from the last N days"),
    storage: Storage = Depends(get_storage),
):
    """
    List traffic samples, newest first.

    The days window is applied before the limit.
    """
    return storage.list_bandwidth_metrics(device_id=device_id, limit=limit, days=days)


@router.get("/{metric_id}", response_model=BandwidthMetricResponse)
def get_bandwidth_metric(
    metric_id: int = Path(..., ge=1),
    storage: Storage = Depends(get_storage),
):
    metric = storage.get_bandwidth_metric(metric_id)
    if metric is None:
        raise NotFoundError("Bandwidth metric", metric_id)
    return metric


@router.post("", response_model=BandwidthMetricResponse, status_code=status.HTTP_201_CREATED)
def create_bandwidth_metric(
    request: BandwidthMetricCreateRequest,
    storage: Storage = Depends(get_storage),
):
    """Record a traffic sample; the timestamp is assigned by the server."""
    metric = storage.create_bandwidth_metric(request)
    logger.info(f"Created bandwidth metric: id={metric.id}, device_id={metric.device_id}")
    return metric


@router.delete("/{metric_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_bandwidth_metric(
    metric_id: int = Path(..., ge=1),
    storage: Storage = Depends(get_storage),
):
    if not storage.delete_bandwidth_metric(metric_id):
        raise NotFoundError("Bandwidth metric", metric_id)
    logger.info(f"Deleted bandwidth metric: id={metric_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
