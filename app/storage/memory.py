"""
In-memory entity store for demos and tests.

Each entity lives in its own arena: a dict from id to record plus a monotonic
counter. Ids are never reused within one instance and restart at 1 for a new
instance. A re-entrant lock serialises access so multi-step mutations (the
vault cascade) are atomic for other callers in the same process.
"""
import logging
import threading
from datetime import datetime
from typing import Callable, Dict, Generic, Iterable, List, Optional, TypeVar

from pydantic import BaseModel

from app.core.errors import ValidationError
from app.storage.base import (
    DEFAULT_EVENT_LIMIT,
    DEFAULT_HISTORY_LIMIT,
    DEFAULT_METRIC_LIMIT,
    Storage,
)
from app.schemas.bandwidth_metric import BandwidthMetricCreateRequest, BandwidthMetricResponse
from app.schemas.device import DeviceCreateRequest, DeviceResponse, DeviceUpdateRequest
from app.schemas.ids_rule import IdsRuleCreateRequest, IdsRuleResponse, IdsRuleUpdateRequest
from app.schemas.password_vault import (
    PasswordEntryCreateRequest,
    PasswordEntryResponse,
    PasswordEntryUpdateRequest,
    PasswordVaultCreateRequest,
    PasswordVaultResponse,
    PasswordVaultUpdateRequest,
)
from app.schemas.security_event import (
    SecurityEventCreateRequest,
    SecurityEventResponse,
    SecurityEventUpdateRequest,
)
from app.schemas.system_metric import SystemMetricCreateRequest, SystemMetricResponse
from app.utils.timeutil import advance_timestamp, utcnow, window_start

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=BaseModel)


class Arena(Generic[R]):
    """Id-keyed record table with a never-reused identifier counter."""

    def __init__(self):
        self._records: Dict[int, R] = {}
        self._next_id = 1

    def insert(self, build: Callable[[int], R]) -> R:
        record_id = self._next_id
        self._next_id += 1
        record = build(record_id)
        self._records[record_id] = record
        return record.model_copy(deep=True)

    def get(self, record_id: int) -> Optional[R]:
        record = self._records.get(record_id)
        return record.model_copy(deep=True) if record is not None else None

    def replace(self, record_id: int, record: R) -> R:
        self._records[record_id] = record
        return record.model_copy(deep=True)

    def remove(self, record_id: int) -> bool:
        return self._records.pop(record_id, None) is not None

    def values(self) -> List[R]:
        """Stored records in insertion order (ascending id)."""
        return list(self._records.values())

    def __len__(self) -> int:
        return len(self._records)


def _newest_first(records: Iterable[R], key: Callable[[R], datetime], limit: Optional[int] = None) -> List[R]:
    # sorted() is stable with reverse=True, so ties keep ascending-id order
    ordered = sorted(records, key=key, reverse=True)
    if limit is not None:
        ordered = ordered[:limit]
    return [record.model_copy(deep=True) for record in ordered]


class MemoryStorage(Storage):
    """Storage backed by per-entity arenas owned by this instance."""

    backend_name = "memory"

    def __init__(self):
        self._lock = threading.RLock()
        self.devices: Arena[DeviceResponse] = Arena()
        self.bandwidth_metrics: Arena[BandwidthMetricResponse] = Arena()
        self.system_metrics: Arena[SystemMetricResponse] = Arena()
        self.security_events: Arena[SecurityEventResponse] = Arena()
        self.ids_rules: Arena[IdsRuleResponse] = Arena()
        self.password_vaults: Arena[PasswordVaultResponse] = Arena()
        self.password_entries: Arena[PasswordEntryResponse] = Arena()

    # Devices

    def _ensure_unique_ip(self, ip_address: str, exclude_id: Optional[int] = None) -> None:
        for device in self.devices.values():
            if device.ip_address == ip_address and device.id != exclude_id:
                raise ValidationError.for_field(
                    "ipAddress", f"Device with IP address '{ip_address}' already exists"
                )

    def list_devices(self) -> List[DeviceResponse]:
        with self._lock:
            return _newest_first(self.devices.values(), key=lambda d: d.last_activity)

    def get_device(self, device_id: int) -> Optional[DeviceResponse]:
        with self._lock:
            return self.devices.get(device_id)

    def create_device(self, data: DeviceCreateRequest) -> DeviceResponse:
        with self._lock:
            self._ensure_unique_ip(data.ip_address)
            return self.devices.insert(
                lambda new_id: DeviceResponse(id=new_id, last_activity=utcnow(), **data.model_dump())
            )

    def update_device(self, device_id: int, data: DeviceUpdateRequest) -> Optional[DeviceResponse]:
        with self._lock:
            device = self.devices.get(device_id)
            if device is None:
                return None
            changes = data.changes()
            if "ip_address" in changes:
                self._ensure_unique_ip(changes["ip_address"], exclude_id=device_id)
            changes["last_activity"] = advance_timestamp(device.last_activity)
            return self.devices.replace(device_id, device.model_copy(update=changes))

    def delete_device(self, device_id: int) -> bool:
        with self._lock:
            return self.devices.remove(device_id)

    # Bandwidth metrics

    def list_bandwidth_metrics(
        self,
        device_id: Optional[int] = None,
        limit: int = DEFAULT_METRIC_LIMIT,
        days: Optional[int] = None,
    ) -> List[BandwidthMetricResponse]:
        with self._lock:
            metrics = self.bandwidth_metrics.values()
            if device_id is not None:
                metrics = [m for m in metrics if m.device_id == device_id]
            if days is not None:
                start = window_start(days)
                metrics = [m for m in metrics if m.timestamp >= start]
            return _newest_first(metrics, key=lambda m: m.timestamp, limit=limit)

    def get_bandwidth_metric(self, metric_id: int) -> Optional[BandwidthMetricResponse]:
        with self._lock:
            return self.bandwidth_metrics.get(metric_id)

    def create_bandwidth_metric(
        self,
        data: BandwidthMetricCreateRequest,
        timestamp: Optional[datetime] = None,
    ) -> BandwidthMetricResponse:
        with self._lock:
            return self.bandwidth_metrics.insert(
                lambda new_id: BandwidthMetricResponse(
                    id=new_id, timestamp=timestamp or utcnow(), **data.model_dump()
                )
            )

    def delete_bandwidth_metric(self, metric_id: int) -> bool:
        with self._lock:
            return self.bandwidth_metrics.remove(metric_id)

    # System metrics

    def get_latest_system_metric(self) -> Optional[SystemMetricResponse]:
        latest = self.list_system_metrics(limit=1)
        return latest[0] if latest else None

    def list_system_metrics(self, limit: int = DEFAULT_HISTORY_LIMIT) -> List[SystemMetricResponse]:
        with self._lock:
            return _newest_first(self.system_metrics.values(), key=lambda m: m.timestamp, limit=limit)

    def get_system_metric(self, metric_id: int) -> Optional[SystemMetricResponse]:
        with self._lock:
            return self.system_metrics.get(metric_id)

    def create_system_metric(
        self,
        data: SystemMetricCreateRequest,
        timestamp: Optional[datetime] = None,
    ) -> SystemMetricResponse:
        with self._lock:
            return self.system_metrics.insert(
                lambda new_id: SystemMetricResponse(
                    id=new_id, timestamp=timestamp or utcnow(), **data.model_dump()
                )
            )

    def delete_system_metric(self, metric_id: int) -> bool:
        with self._lock:
            return self.system_metrics.remove(metric_id)

    # Security events

    def list_security_events(
        self,
        limit: int = DEFAULT_EVENT_LIMIT,
        status: Optional[str] = None,
        device_id: Optional[int] = None,
    ) -> List[SecurityEventResponse]:
        with self._lock:
            events = self.security_events.values()
            if status is not None:
                events = [e for e in events if e.status.value == status]
            if device_id is not None:
                events = [e for e in events if e.device_id == device_id]
            return _newest_first(events, key=lambda e: e.timestamp, limit=limit)

    def get_security_event(self, event_id: int) -> Optional[SecurityEventResponse]:
        with self._lock:
            return self.security_events.get(event_id)

    def create_security_event(
        self,
        data: SecurityEventCreateRequest,
        timestamp: Optional[datetime] = None,
    ) -> SecurityEventResponse:
        with self._lock:
            return self.security_events.insert(
                lambda new_id: SecurityEventResponse(
                    id=new_id, timestamp=timestamp or utcnow(), **data.model_dump()
                )
            )

    def update_security_event(
        self, event_id: int, data: SecurityEventUpdateRequest
    ) -> Optional[SecurityEventResponse]:
        with self._lock:
            event = self.security_events.get(event_id)
            if event is None:
                return None
            return self.security_events.replace(event_id, event.model_copy(update=data.changes()))

    def delete_security_event(self, event_id: int) -> bool:
        with self._lock:
            return self.security_events.remove(event_id)

    # IDS rules

    def list_ids_rules(self) -> List[IdsRuleResponse]:
        with self._lock:
            return _newest_first(self.ids_rules.values(), key=lambda r: r.created_at)

    def get_ids_rule(self, rule_id: int) -> Optional[IdsRuleResponse]:
        with self._lock:
            return self.ids_rules.get(rule_id)

    def create_ids_rule(self, data: IdsRuleCreateRequest) -> IdsRuleResponse:
        with self._lock:
            now = utcnow()
            return self.ids_rules.insert(
                lambda new_id: IdsRuleResponse(id=new_id, created_at=now, updated_at=now, **data.model_dump())
            )

    def update_ids_rule(self, rule_id: int, data: IdsRuleUpdateRequest) -> Optional[IdsRuleResponse]:
        with self._lock:
            rule = self.ids_rules.get(rule_id)
            if rule is None:
                return None
            changes = data.changes()
            changes["updated_at"] = advance_timestamp(rule.updated_at)
            return self.ids_rules.replace(rule_id, rule.model_copy(update=changes))

    def delete_ids_rule(self, rule_id: int) -> bool:
        with self._lock:
            return self.ids_rules.remove(rule_id)

    # Password vaults

    def list_password_vaults(self) -> List[PasswordVaultResponse]:
        with self._lock:
            return _newest_first(self.password_vaults.values(), key=lambda v: v.created_at)

    def get_password_vault(self, vault_id: int) -> Optional[PasswordVaultResponse]:
        with self._lock:
            return self.password_vaults.get(vault_id)

    def create_password_vault(self, data: PasswordVaultCreateRequest) -> PasswordVaultResponse:
        with self._lock:
            now = utcnow()
            return self.password_vaults.insert(
                lambda new_id: PasswordVaultResponse(
                    id=new_id, created_at=now, updated_at=now, **data.model_dump()
                )
            )

    def update_password_vault(
        self, vault_id: int, data: PasswordVaultUpdateRequest
    ) -> Optional[PasswordVaultResponse]:
        with self._lock:
            vault = self.password_vaults.get(vault_id)
            if vault is None:
                return None
            changes = data.changes()
            changes["updated_at"] = advance_timestamp(vault.updated_at)
            return self.password_vaults.replace(vault_id, vault.model_copy(update=changes))

    def delete_password_vault(self, vault_id: int) -> bool:
        with self._lock:
            if self.password_vaults.get(vault_id) is None:
                return False
            owned = [e.id for e in self.password_entries.values() if e.vault_id == vault_id]
            for entry_id in owned:
                self.password_entries.remove(entry_id)
            self.password_vaults.remove(vault_id)
            logger.debug(f"Cascade-deleted {len(owned)} entries with vault {vault_id}")
            return True

    # Password entries

    def _ensure_vault_exists(self, vault_id: int) -> None:
        if self.password_vaults.get(vault_id) is None:
            raise ValidationError.for_field("vaultId", f"Password vault with id {vault_id} does not exist")

    def list_password_entries(self, vault_id: Optional[int] = None) -> List[PasswordEntryResponse]:
        with self._lock:
            entries = self.password_entries.values()
            if vault_id is not None:
                entries = [e for e in entries if e.vault_id == vault_id]
            return _newest_first(entries, key=lambda e: e.created_at)

    def get_password_entry(self, entry_id: int) -> Optional[PasswordEntryResponse]:
        with self._lock:
            return self.password_entries.get(entry_id)

    def create_password_entry(self, data: PasswordEntryCreateRequest) -> PasswordEntryResponse:
        with self._lock:
            self._ensure_vault_exists(data.vault_id)
            now = utcnow()
            return self.password_entries.insert(
                lambda new_id: PasswordEntryResponse(
                    id=new_id, created_at=now, updated_at=now, last_used=None, **data.model_dump()
                )
            )

    def update_password_entry(
        self, entry_id: int, data: PasswordEntryUpdateRequest
    ) -> Optional[PasswordEntryResponse]:
        with self._lock:
            entry = self.password_entries.get(entry_id)
            if entry is None:
                return None
            changes = data.changes()
            if "vault_id" in changes:
                self._ensure_vault_exists(changes["vault_id"])
            changes["updated_at"] = advance_timestamp(entry.updated_at)
            return self.password_entries.replace(entry_id, entry.model_copy(update=changes))

    def delete_password_entry(self, entry_id: int) -> bool:
        with self._lock:
            return self.password_entries.remove(entry_id)
