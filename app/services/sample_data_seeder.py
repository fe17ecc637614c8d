"""
Service for seeding demo data into an empty store.
"""
import logging

from app.models.device import DeviceStatus, DeviceType
from app.models.security_event import EventStatus, Severity
from app.schemas.device import DeviceCreateRequest
from app.schemas.ids_rule import IdsRuleCreateRequest
from app.schemas.password_vault import PasswordEntryCreateRequest, PasswordVaultCreateRequest
from app.schemas.security_event import SecurityEventCreateRequest
from app.schemas.system_metric import SystemMetricCreateRequest
from app.storage.base import Storage

logger = logging.getLogger(__name__)

SAMPLE_DEVICES = [
    {
        "name": "Core Router R1",
        "type": DeviceType.ROUTER,
        "ip_address": "192.168.1.1",
        "status": DeviceStatus.ONLINE,
        "bandwidth": 450,
        "max_bandwidth": 1000,
        "model": "Cisco ASR 1000",
        "location": "Data Center A",
    },
    {
        "name": "Switch SW-01",
        "type": DeviceType.SWITCH,
        "ip_address": "192.168.1.10",
        "status": DeviceStatus.ONLINE,
        "bandwidth": 320,
        "max_bandwidth": 600,
        "model": "HP ProCurve 2920",
        "location": "Floor 1",
    },
    {
        "name": "Access Point AP-01",
        "type": DeviceType.ACCESS_POINT,
        "ip_address": "192.168.1.20",
        "status": DeviceStatus.WARNING,
        "bandwidth": 890,
        "max_bandwidth": 1000,
        "model": "Ubiquiti UniFi",
        "location": "Floor 2",
    },
    {
        "name": "Firewall FW-01",
        "type": DeviceType.FIREWALL,
        "ip_address": "192.168.1.5",
        "status": DeviceStatus.OFFLINE,
        "bandwidth": 0,
        "max_bandwidth": 500,
        "model": "Fortinet FortiGate",
        "location": "DMZ",
    },
]

SAMPLE_IDS_RULES = [
    {
        "name": "SSH Brute Force Detection",
        "description": "Detects repeated SSH login failures from the same address",
        "pattern": r"^.*sshd.*Failed password.*from\s+(\d+\.\d+\.\d+\.\d+)",
        "severity": Severity.HIGH,
    },
    {
        "name": "Port Scan Detection",
        "description": "Detects suspicious port scanning activity",
        "pattern": "TCP.*SYN.*multiple_ports",
        "severity": Severity.MEDIUM,
    },
    {
        "name": "Malware Communication",
        "description": "Detects known malware command-and-control patterns",
        "pattern": r".*\.exe.*suspicious_domain\.com",
        "severity": Severity.CRITICAL,
    },
    {
        "name": "Unusual Traffic Volume",
        "description": "Detects unusually high data transfer",
        "pattern": "bandwidth_threshold_exceeded",
        "severity": Severity.MEDIUM,
    },
]

# device_index points into SAMPLE_DEVICES
SAMPLE_SECURITY_EVENTS = [
    {
        "event_type": "brute_force",
        "severity": Severity.HIGH,
        "source_ip": "45.123.45.67",
        "target_ip": "192.168.1.1",
        "description": "Multiple failed SSH login attempts detected",
        "status": EventStatus.NEW,
        "device_index": 0,
    },
    {
        "event_type": "port_scan",
        "severity": Severity.MEDIUM,
        "source_ip": "178.62.199.34",
        "target_ip": "192.168.1.10",
        "description": "Port scan activity from external address",
        "status": EventStatus.INVESTIGATING,
        "device_index": 1,
    },
    {
        "event_type": "unusual_traffic",
        "severity": Severity.MEDIUM,
        "source_ip": "192.168.1.20",
        "target_ip": "203.0.113.5",
        "description": "Unusually high outbound traffic",
        "status": EventStatus.NEW,
        "device_index": 2,
    },
    {
        "event_type": "intrusion_attempt",
        "severity": Severity.CRITICAL,
        "source_ip": "198.51.100.23",
        "target_ip": "192.168.1.5",
        "description": "Suspicious intrusion attempt against the firewall",
        "status": EventStatus.RESOLVED,
        "device_index": 3,
    },
]

SAMPLE_PASSWORD_ENTRIES = [
    {
        "title": "Router Admin",
        "username": "admin",
        "email": "admin@company.com",
        "encrypted_password": "encrypted_admin_password_123",
        "website": "https://192.168.1.1",
        "notes": "Core router administrator access",
        "category": "Network Equipment",
        "is_favorite": True,
    },
    {
        "title": "Switch Management",
        "username": "netadmin",
        "email": "network@company.com",
        "encrypted_password": "encrypted_switch_password_456",
        "website": "https://192.168.1.10",
        "notes": "Switch management access",
        "category": "Network Equipment",
        "is_favorite": False,
    },
    {
        "title": "Firewall Console",
        "username": "fwadmin",
        "encrypted_password": "encrypted_firewall_password_789",
        "website": "https://192.168.1.5",
        "notes": "Firewall configuration access",
        "category": "Security",
        "is_favorite": True,
    },
]


def seed_sample_data(storage: Storage) -> bool:
    """
    Seed demo devices, IDS rules, security events, one system metric and a
    default vault with entries.

    Returns:
        True if data was written, False if the store already had devices
    """
    if storage.list_devices():
        logger.info("Store already contains devices. Skipping sample data seed.")
        return False

    logger.info("Seeding sample data...")

    devices = [storage.create_device(DeviceCreateRequest(**data)) for data in SAMPLE_DEVICES]

    storage.create_system_metric(
        SystemMetricCreateRequest(active_devices=127, total_bandwidth=2.4, warnings=3, uptime=99.9)
    )

    for rule_data in SAMPLE_IDS_RULES:
        storage.create_ids_rule(IdsRuleCreateRequest(enabled=True, **rule_data))

    for event_data in SAMPLE_SECURITY_EVENTS:
        data = dict(event_data)
        device = devices[data.pop("device_index")]
        storage.create_security_event(SecurityEventCreateRequest(device_id=device.id, **data))

    vault = storage.create_password_vault(
        PasswordVaultCreateRequest(
            name="Standard Vault",
            description="Main vault for network passwords and credentials",
        )
    )
    for entry_data in SAMPLE_PASSWORD_ENTRIES:
        storage.create_password_entry(PasswordEntryCreateRequest(vault_id=vault.id, **entry_data))

    logger.info(
        f"Sample data seeded: {len(devices)} devices, {len(SAMPLE_IDS_RULES)} IDS rules, "
        f"{len(SAMPLE_SECURITY_EVENTS)} security events, {len(SAMPLE_PASSWORD_ENTRIES)} vault entries"
    )
    return True


def ensure_sample_data_seeded(storage: Storage) -> None:
    """Seed sample data if the store is empty (called on startup)."""
    try:
        seed_sample_data(storage)
    except Exception as e:
        logger.error(f"Error seeding sample data: {e}", exc_info=True)
