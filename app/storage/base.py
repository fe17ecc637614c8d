"""
Entity store contract.

Both backends return the Pydantic response records from ``app.schemas`` so the
HTTP layer never depends on which store is active. Lookups signal a missing
record with ``None`` (get/update) or ``False`` (delete); they do not raise.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

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

# Default result bounds when the caller does not pass a limit
DEFAULT_METRIC_LIMIT = 50
DEFAULT_EVENT_LIMIT = 50
DEFAULT_HISTORY_LIMIT = 24


class Storage(ABC):
    """Keyed storage for every dashboard entity."""

    backend_name = "abstract"

    def ping(self) -> None:
        """Raise StoreError if the backing store cannot be reached."""

    # Devices

    @abstractmethod
    def list_devices(self) -> List[DeviceResponse]:
        """All devices, most recently active first."""

    @abstractmethod
    def get_device(self, device_id: int) -> Optional[DeviceResponse]:
        pass

    @abstractmethod
    def create_device(self, data: DeviceCreateRequest) -> DeviceResponse:
        """Insert a device. Raises ValidationError if the IP address is taken."""

    @abstractmethod
    def update_device(self, device_id: int, data: DeviceUpdateRequest) -> Optional[DeviceResponse]:
        """Merge supplied fields and refresh lastActivity."""

    @abstractmethod
    def delete_device(self, device_id: int) -> bool:
        """Delete a device. Metrics and events that reference it are kept."""

    # Bandwidth metrics

    @abstractmethod
    def list_bandwidth_metrics(
        self,
        device_id: Optional[int] = None,
        limit: int = DEFAULT_METRIC_LIMIT,
        days: Optional[int] = None,
    ) -> List[BandwidthMetricResponse]:
        """Newest first, optionally restricted to one device and a trailing window of days."""

    @abstractmethod
    def get_bandwidth_metric(self, metric_id: int) -> Optional[BandwidthMetricResponse]:
        pass

    @abstractmethod
    def create_bandwidth_metric(
        self,
        data: BandwidthMetricCreateRequest,
        timestamp: Optional[datetime] = None,
    ) -> BandwidthMetricResponse:
        """Append a sample. ``timestamp`` is for internal callers only."""

    @abstractmethod
    def delete_bandwidth_metric(self, metric_id: int) -> bool:
        pass

    # System metrics

    @abstractmethod
    def get_latest_system_metric(self) -> Optional[SystemMetricResponse]:
        pass

    @abstractmethod
    def list_system_metrics(self, limit: int = DEFAULT_HISTORY_LIMIT) -> List[SystemMetricResponse]:
        pass

    @abstractmethod
    def get_system_metric(self, metric_id: int) -> Optional[SystemMetricResponse]:
        pass

    @abstractmethod
    def create_system_metric(
        self,
        data: SystemMetricCreateRequest,
        timestamp: Optional[datetime] = None,
    ) -> SystemMetricResponse:
        pass

    @abstractmethod
    def delete_system_metric(self, metric_id: int) -> bool:
        pass

    # Security events

    @abstractmethod
    def list_security_events(
        self,
        limit: int = DEFAULT_EVENT_LIMIT,
        status: Optional[str] = None,
        device_id: Optional[int] = None,
    ) -> List[SecurityEventResponse]:
        """
        Newest first. ``status`` is compared as plain text, so a value outside
        the known set simply matches nothing.
        """

    @abstractmethod
    def get_security_event(self, event_id: int) -> Optional[SecurityEventResponse]:
        pass

    @abstractmethod
    def create_security_event(
        self,
        data: SecurityEventCreateRequest,
        timestamp: Optional[datetime] = None,
    ) -> SecurityEventResponse:
        pass

    @abstractmethod
    def update_security_event(
        self, event_id: int, data: SecurityEventUpdateRequest
    ) -> Optional[SecurityEventResponse]:
        pass

    @abstractmethod
    def delete_security_event(self, event_id: int) -> bool:
        pass

    # IDS rules

    @abstractmethod
    def list_ids_rules(self) -> List[IdsRuleResponse]:
        pass

    @abstractmethod
    def get_ids_rule(self, rule_id: int) -> Optional[IdsRuleResponse]:
        pass

    @abstractmethod
    def create_ids_rule(self, data: IdsRuleCreateRequest) -> IdsRuleResponse:
        pass

    @abstractmethod
    def update_ids_rule(self, rule_id: int, data: IdsRuleUpdateRequest) -> Optional[IdsRuleResponse]:
        """Merge supplied fields and refresh updatedAt."""

    @abstractmethod
    def delete_ids_rule(self, rule_id: int) -> bool:
        pass

    # Password vaults

    @abstractmethod
    def list_password_vaults(self) -> List[PasswordVaultResponse]:
        pass

    @abstractmethod
    def get_password_vault(self, vault_id: int) -> Optional[PasswordVaultResponse]:
        pass

    @abstractmethod
    def create_password_vault(self, data: PasswordVaultCreateRequest) -> PasswordVaultResponse:
        pass

    @abstractmethod
    def update_password_vault(
        self, vault_id: int, data: PasswordVaultUpdateRequest
    ) -> Optional[PasswordVaultResponse]:
        pass

    @abstractmethod
    def delete_password_vault(self, vault_id: int) -> bool:
        """Delete a vault and all of its entries as one atomic step."""

    # Password entries

    @abstractmethod
    def list_password_entries(self, vault_id: Optional[int] = None) -> List[PasswordEntryResponse]:
        pass

    @abstractmethod
    def get_password_entry(self, entry_id: int) -> Optional[PasswordEntryResponse]:
        pass

    @abstractmethod
    def create_password_entry(self, data: PasswordEntryCreateRequest) -> PasswordEntryResponse:
        """Insert an entry. Raises ValidationError if the vault does not exist."""

    @abstractmethod
    def update_password_entry(
        self, entry_id: int, data: PasswordEntryUpdateRequest
    ) -> Optional[PasswordEntryResponse]:
        pass

    @abstractmethod
    def delete_password_entry(self, entry_id: int) -> bool:
        pass
