"""
Relational entity store backed by SQLAlchemy.

One instance wraps one Session (one per request). Every write commits its own
transaction; any SQLAlchemyError rolls the session back and surfaces as
StoreError so the caller never sees a half-applied change.
"""
import enum
import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import StoreError, ValidationError
from app.models.bandwidth_metric import BandwidthMetric
from app.models.device import Device
from app.models.ids_rule import IdsRule
from app.models.password_vault import PasswordEntry, PasswordVault
from app.models.security_event import SecurityEvent
from app.models.system_metric import SystemMetric
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


def _column_values(values: Dict[str, Any]) -> Dict[str, Any]:
    """Unwrap enum members to the plain strings stored in the table."""
    return {key: (value.value if isinstance(value, enum.Enum) else value) for key, value in values.items()}


class DatabaseStorage(Storage):
    """Storage backed by the SQLAlchemy models in ``app.models``."""

    backend_name = "database"

    def __init__(self, db: Session):
        self.db = db

    def ping(self) -> None:
        with self._reading("reach the database"):
            self.db.execute(text("SELECT 1")).fetchone()

    @contextmanager
    def _reading(self, action: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError(f"Failed to {action}: {e}") from e

    @contextmanager
    def _writing(self, action: str) -> Iterator[None]:
        """Commit on success; roll back on any failure, including validation."""
        try:
            yield
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError(f"Failed to {action}: {e}") from e
        except Exception:
            self.db.rollback()
            raise

    def _delete_row(self, model, record_id: int, action: str) -> bool:
        with self._writing(action):
            row = self.db.get(model, record_id)
            if row is None:
                return False
            self.db.delete(row)
        logger.debug(f"Deleted {model.__tablename__} row: id={record_id}")
        return True

    # Devices

    def _ensure_unique_ip(self, ip_address: str, exclude_id: Optional[int] = None) -> None:
        query = self.db.query(Device.id).filter(Device.ip_address == ip_address)
        if exclude_id is not None:
            query = query.filter(Device.id != exclude_id)
        if query.first() is not None:
            raise ValidationError.for_field(
                "ipAddress", f"Device with IP address '{ip_address}' already exists"
            )

    def list_devices(self) -> List[DeviceResponse]:
        with self._reading("list devices"):
            rows = self.db.query(Device).order_by(Device.last_activity.desc(), Device.id.asc()).all()
            return [DeviceResponse.model_validate(row) for row in rows]

    def get_device(self, device_id: int) -> Optional[DeviceResponse]:
        with self._reading("retrieve device"):
            row = self.db.get(Device, device_id)
            return DeviceResponse.model_validate(row) if row else None

    def create_device(self, data: DeviceCreateRequest) -> DeviceResponse:
        with self._writing("create device"):
            self._ensure_unique_ip(data.ip_address)
            device = Device(last_activity=utcnow(), **_column_values(data.model_dump()))
            self.db.add(device)
        self.db.refresh(device)
        return DeviceResponse.model_validate(device)

    def update_device(self, device_id: int, data: DeviceUpdateRequest) -> Optional[DeviceResponse]:
        with self._writing("update device"):
            device = self.db.get(Device, device_id)
            if device is None:
                return None
            changes = _column_values(data.changes())
            if "ip_address" in changes:
                self._ensure_unique_ip(changes["ip_address"], exclude_id=device_id)
            for field, value in changes.items():
                setattr(device, field, value)
            device.last_activity = advance_timestamp(device.last_activity)
        self.db.refresh(device)
        return DeviceResponse.model_validate(device)

    def delete_device(self, device_id: int) -> bool:
        return self._delete_row(Device, device_id, "delete device")

    # Bandwidth metrics

    def list_bandwidth_metrics(
        self,
        device_id: Optional[int] = None,
        limit: int = DEFAULT_METRIC_LIMIT,
        days: Optional[int] = None,
    ) -> List[BandwidthMetricResponse]:
        with self._reading("list bandwidth metrics"):
            query = self.db.query(BandwidthMetric)
            if device_id is not None:
                query = query.filter(BandwidthMetric.device_id == device_id)
            if days is not None:
                query = query.filter(BandwidthMetric.timestamp >= window_start(days))
            rows = query.order_by(BandwidthMetric.timestamp.desc(), BandwidthMetric.id.asc()).limit(limit).all()
            return [BandwidthMetricResponse.model_validate(row) for row in rows]

    def get_bandwidth_metric(self, metric_id: int) -> Optional[BandwidthMetricResponse]:
        with self._reading("retrieve bandwidth metric"):
            row = self.db.get(BandwidthMetric, metric_id)
            return BandwidthMetricResponse.model_validate(row) if row else None

    def create_bandwidth_metric(
        self,
        data: BandwidthMetricCreateRequest,
        timestamp: Optional[datetime] = None,
    ) -> BandwidthMetricResponse:
        with self._writing("create bandwidth metric"):
            metric = BandwidthMetric(timestamp=timestamp or utcnow(), **data.model_dump())
            self.db.add(metric)
        self.db.refresh(metric)
        return BandwidthMetricResponse.model_validate(metric)

    def delete_bandwidth_metric(self, metric_id: int) -> bool:
        return self._delete_row(BandwidthMetric, metric_id, "delete bandwidth metric")

    # System metrics

    def get_latest_system_metric(self) -> Optional[SystemMetricResponse]:
        latest = self.list_system_metrics(limit=1)
        return latest[0] if latest else None

    def list_system_metrics(self, limit: int = DEFAULT_HISTORY_LIMIT) -> List[SystemMetricResponse]:
        with self._reading("list system metrics"):
            rows = (
                self.db.query(SystemMetric)
                .order_by(SystemMetric.timestamp.desc(), SystemMetric.id.asc())
                .limit(limit)
                .all()
            )
            return [SystemMetricResponse.model_validate(row) for row in rows]

    def get_system_metric(self, metric_id: int) -> Optional[SystemMetricResponse]:
        with self._reading("retrieve system metric"):
            row = self.db.get(SystemMetric, metric_id)
            return SystemMetricResponse.model_validate(row) if row else None

    def create_system_metric(
        self,
        data: SystemMetricCreateRequest,
        timestamp: Optional[datetime] = None,
    ) -> SystemMetricResponse:
        with self._writing("create system metric"):
            metric = SystemMetric(timestamp=timestamp or utcnow(), **data.model_dump())
            self.db.add(metric)
        self.db.refresh(metric)
        return SystemMetricResponse.model_validate(metric)

    def delete_system_metric(self, metric_id: int) -> bool:
        return self._delete_row(SystemMetric, metric_id, "delete system metric")

    # Security events

    def list_security_events(
        self,
        limit: int = DEFAULT_EVENT_LIMIT,
        status: Optional[str] = None,
        device_id: Optional[int] = None,
    ) -> List[SecurityEventResponse]:
        with self._reading("list security events"):
            query = self.db.query(SecurityEvent)
            if status is not None:
                query = query.filter(SecurityEvent.status == status)
            if device_id is not None:
                query = query.filter(SecurityEvent.device_id == device_id)
            rows = query.order_by(SecurityEvent.timestamp.desc(), SecurityEvent.id.asc()).limit(limit).all()
            return [SecurityEventResponse.model_validate(row) for row in rows]

    def get_security_event(self, event_id: int) -> Optional[SecurityEventResponse]:
        with self._reading("retrieve security event"):
            row = self.db.get(SecurityEvent, event_id)
            return SecurityEventResponse.model_validate(row) if row else None

    def create_security_event(
        self,
        data: SecurityEventCreateRequest,
        timestamp: Optional[datetime] = None,
    ) -> SecurityEventResponse:
        with self._writing("create security event"):
            event = SecurityEvent(timestamp=timestamp or utcnow(), **_column_values(data.model_dump()))
            self.db.add(event)
        self.db.refresh(event)
        return SecurityEventResponse.model_validate(event)

    def update_security_event(
        self, event_id: int, data: SecurityEventUpdateRequest
    ) -> Optional[SecurityEventResponse]:
        with self._writing("update security event"):
            event = self.db.get(SecurityEvent, event_id)
            if event is None:
                return None
            for field, value in _column_values(data.changes()).items():
                setattr(event, field, value)
        self.db.refresh(event)
        return SecurityEventResponse.model_validate(event)

    def delete_security_event(self, event_id: int) -> bool:
        return self._delete_row(SecurityEvent, event_id, "delete security event")

    # IDS rules

    def list_ids_rules(self) -> List[IdsRuleResponse]:
        with self._reading("list IDS rules"):
            rows = self.db.query(IdsRule).order_by(IdsRule.created_at.desc(), IdsRule.id.asc()).all()
            return [IdsRuleResponse.model_validate(row) for row in rows]

    def get_ids_rule(self, rule_id: int) -> Optional[IdsRuleResponse]:
        with self._reading("retrieve IDS rule"):
            row = self.db.get(IdsRule, rule_id)
            return IdsRuleResponse.model_validate(row) if row else None

    def create_ids_rule(self, data: IdsRuleCreateRequest) -> IdsRuleResponse:
        with self._writing("create IDS rule"):
            now = utcnow()
            rule = IdsRule(created_at=now, updated_at=now, **_column_values(data.model_dump()))
            self.db.add(rule)
        self.db.refresh(rule)
        return IdsRuleResponse.model_validate(rule)

    def update_ids_rule(self, rule_id: int, data: IdsRuleUpdateRequest) -> Optional[IdsRuleResponse]:
        with self._writing("update IDS rule"):
            rule = self.db.get(IdsRule, rule_id)
            if rule is None:
                return None
            for field, value in _column_values(data.changes()).items():
                setattr(rule, field, value)
            rule.updated_at = advance_timestamp(rule.updated_at)
        self.db.refresh(rule)
        return IdsRuleResponse.model_validate(rule)

    def delete_ids_rule(self, rule_id: int) -> bool:
        return self._delete_row(IdsRule, rule_id, "delete IDS rule")

    # Password vaults

    def list_password_vaults(self) -> List[PasswordVaultResponse]:
        with self._reading("list password vaults"):
            rows = (
                self.db.query(PasswordVault)
                .order_by(PasswordVault.created_at.desc(), PasswordVault.id.asc())
                .all()
            )
            return [PasswordVaultResponse.model_validate(row) for row in rows]

    def get_password_vault(self, vault_id: int) -> Optional[PasswordVaultResponse]:
        with self._reading("retrieve password vault"):
            row = self.db.get(PasswordVault, vault_id)
            return PasswordVaultResponse.model_validate(row) if row else None

    def create_password_vault(self, data: PasswordVaultCreateRequest) -> PasswordVaultResponse:
        with self._writing("create password vault"):
            now = utcnow()
            vault = PasswordVault(created_at=now, updated_at=now, **data.model_dump())
            self.db.add(vault)
        self.db.refresh(vault)
        return PasswordVaultResponse.model_validate(vault)

    def update_password_vault(
        self, vault_id: int, data: PasswordVaultUpdateRequest
    ) -> Optional[PasswordVaultResponse]:
        with self._writing("update password vault"):
            vault = self.db.get(PasswordVault, vault_id)
            if vault is None:
                return None
            for field, value in data.changes().items():
                setattr(vault, field, value)
            vault.updated_at = advance_timestamp(vault.updated_at)
        self.db.refresh(vault)
        return PasswordVaultResponse.model_validate(vault)

    def delete_password_vault(self, vault_id: int) -> bool:
        # Entries and vault go in one transaction: both or neither
        with self._writing("delete password vault"):
            vault = self.db.get(PasswordVault, vault_id)
            if vault is None:
                return False
            removed = (
                self.db.query(PasswordEntry)
                .filter(PasswordEntry.vault_id == vault_id)
                .delete(synchronize_session=False)
            )
            self.db.delete(vault)
        logger.debug(f"Cascade-deleted {removed} entries with vault {vault_id}")
        return True

    # Password entries

    def _ensure_vault_exists(self, vault_id: int) -> None:
        if self.db.get(PasswordVault, vault_id) is None:
            raise ValidationError.for_field("vaultId", f"Password vault with id {vault_id} does not exist")

    def list_password_entries(self, vault_id: Optional[int] = None) -> List[PasswordEntryResponse]:
        with self._reading("list password entries"):
            query = self.db.query(PasswordEntry)
            if vault_id is not None:
                query = query.filter(PasswordEntry.vault_id == vault_id)
            rows = query.order_by(PasswordEntry.created_at.desc(), PasswordEntry.id.asc()).all()
            return [PasswordEntryResponse.model_validate(row) for row in rows]

    def get_password_entry(self, entry_id: int) -> Optional[PasswordEntryResponse]:
        with self._reading("retrieve password entry"):
            row = self.db.get(PasswordEntry, entry_id)
            return PasswordEntryResponse.model_validate(row) if row else None

    def create_password_entry(self, data: PasswordEntryCreateRequest) -> PasswordEntryResponse:
        with self._writing("create password entry"):
            self._ensure_vault_exists(data.vault_id)
            now = utcnow()
            entry = PasswordEntry(created_at=now, updated_at=now, **data.model_dump())
            self.db.add(entry)
        self.db.refresh(entry)
        return PasswordEntryResponse.model_validate(entry)

    def update_password_entry(
        self, entry_id: int, data: PasswordEntryUpdateRequest
    ) -> Optional[PasswordEntryResponse]:
        with self._writing("update password entry"):
            entry = self.db.get(PasswordEntry, entry_id)
            if entry is None:
                return None
            changes = data.changes()
            if "vault_id" in changes:
                self._ensure_vault_exists(changes["vault_id"])
            for field, value in changes.items():
                setattr(entry, field, value)
            entry.updated_at = advance_timestamp(entry.updated_at)
        self.db.refresh(entry)
        return PasswordEntryResponse.model_validate(entry)

    def delete_password_entry(self, entry_id: int) -> bool:
        return self._delete_row(PasswordEntry, entry_id, "delete password entry")
