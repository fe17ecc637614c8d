"""Schemas for the demo data generator."""
from app.schemas.base import CamelModel


class MockDataResponse(CamelModel):
    """Summary of rows appended by one generator run."""
    message: str
    bandwidth_metrics: int
    system_metrics: int
