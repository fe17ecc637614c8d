"""
Main API router that aggregates all endpoint routers.
"""
from fastapi import APIRouter

from app.api.endpoints import (
    bandwidth_metrics,
    devices,
    health,
    ids_rules,
    mock_data,
    password_entries,
    password_vaults,
    security_events,
    system_metrics,
)

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(devices.router, prefix="/devices", tags=["devices"])
api_router.include_router(bandwidth_metrics.router, prefix="/bandwidth-metrics", tags=["bandwidth-metrics"])
api_router.include_router(system_metrics.router, prefix="/system-metrics", tags=["system-metrics"])
api_router.include_router(security_events.router, prefix="/security-events", tags=["security-events"])
api_router.include_router(security_events.logs_router, prefix="/logs", tags=["logs"])
api_router.include_router(ids_rules.router, prefix="/ids-rules", tags=["ids-rules"])
api_router.include_router(password_vaults.router, prefix="/password-vaults", tags=["password-vaults"])
api_router.include_router(password_entries.router, prefix="/password-entries", tags=["password-entries"])
api_router.include_router(mock_data.router, tags=["mock-data"])
