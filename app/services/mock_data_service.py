"""
Demo traffic simulator.

Appends 24 hourly snapshots: one bandwidth sample per online or warning device
per hour, plus one system metric per hour. Repeated runs append again; nothing
is deduplicated.
"""
import logging
import random
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from app.models.device import ACTIVE_STATUSES
from app.schemas.bandwidth_metric import BandwidthMetricCreateRequest
from app.schemas.system_metric import SystemMetricCreateRequest
from app.storage.base import Storage
from app.utils.timeutil import utcnow

logger = logging.getLogger(__name__)

HOURS = 24

# Upper bounds are exclusive
INCOMING_MAX = 3.0  # GB/s
OUTGOING_MAX = 2.5  # GB/s
ACTIVE_DEVICES_RANGE = (120, 130)
WARNINGS_RANGE = (0, 5)
UPTIME_RANGE = (99.0, 100.0)
TOTAL_BANDWIDTH_RANGE = (2.0, 3.0)


@dataclass
class MockDataResult:
    bandwidth_metrics: int = 0
    system_metrics: int = 0


def _uniform(rng: random.Random, bounds) -> float:
    low, high = bounds
    return low + rng.random() * (high - low)


def generate_mock_data(
    storage: Storage,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> MockDataResult:
    """
    Synthesize the last 24 hours of bandwidth and system metrics.

    Each row is written through its own store call, so on the database backend
    every row commits separately. A failure partway through raises and leaves
    the rows written so far in place.

    Args:
        storage: Target store
        now: End of the simulated window (defaults to the current UTC time)
        rng: Random source, injectable for deterministic tests

    Returns:
        Counts of the rows appended
    """
    now = now or utcnow()
    rng = rng or random.Random()
    result = MockDataResult()

    active = [d for d in storage.list_devices() if d.status.value in ACTIVE_STATUSES]
    logger.info(f"Generating {HOURS}h of mock data for {len(active)} active devices")

    for hour in range(HOURS):
        timestamp = now - timedelta(hours=hour)

        for device in active:
            storage.create_bandwidth_metric(
                BandwidthMetricCreateRequest(
                    device_id=device.id,
                    incoming=rng.random() * INCOMING_MAX,
                    outgoing=rng.random() * OUTGOING_MAX,
                ),
                timestamp=timestamp,
            )
            result.bandwidth_metrics += 1

        storage.create_system_metric(
            SystemMetricCreateRequest(
                active_devices=rng.randrange(*ACTIVE_DEVICES_RANGE),
                total_bandwidth=_uniform(rng, TOTAL_BANDWIDTH_RANGE),
                warnings=rng.randrange(*WARNINGS_RANGE),
                uptime=_uniform(rng, UPTIME_RANGE),
            ),
            timestamp=timestamp,
        )
        result.system_metrics += 1

    logger.info(
        f"Mock data generated: {result.bandwidth_metrics} bandwidth metrics, "
        f"{result.system_metrics} system metrics"
    )
    return result
