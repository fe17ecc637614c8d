"""
Sample traffic generator endpoint.
"""
import logging

from fastapi import APIRouter, Depends

from app.schemas.mock_data import MockDataResponse
from app.services.mock_data_service import generate_mock_data
from app.storage import Storage, get_storage

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/generate-mock-data", response_model=MockDataResponse)
def generate_mock_data_endpoint(storage: Storage = Depends(get_storage)):
    """
    Append 24 hourly bandwidth and system metric snapshots covering the last day.

    Existing records are left untouched; calling this twice doubles the samples.
    """
    result = generate_mock_data(storage)
    logger.info(
        f"Generated mock data: bandwidth_metrics={result.bandwidth_metrics}, "
        f"system_metrics={result.system_metrics}"
    )
    return MockDataResponse(
        message="Mock data generated successfully",
        bandwidth_metrics=result.bandwidth_metrics,
        system_metrics=result.system_metrics,
    )
