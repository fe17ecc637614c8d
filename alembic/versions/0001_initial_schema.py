"""initial schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-17 00:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

AUTOINCREMENT = {"sqlite_autoincrement": True}


def _ts(name: str, nullable: bool = False) -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), nullable=nullable)


def upgrade() -> None:
    op.create_table(
        "devices",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("ip_address", sa.String(length=45), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("bandwidth", sa.Float(), nullable=False),
        sa.Column("max_bandwidth", sa.Float(), nullable=False),
        _ts("last_activity"),
        sa.Column("model", sa.String(length=255), nullable=True),
        sa.Column("location", sa.String(length=255), nullable=True),
        **AUTOINCREMENT,
    )
    op.create_index("ix_devices_id", "devices", ["id"])
    op.create_index("ix_devices_name", "devices", ["name"])
    op.create_index("ix_devices_type", "devices", ["type"])
    op.create_index("ix_devices_ip_address", "devices", ["ip_address"], unique=True)
    op.create_index("ix_devices_status", "devices", ["status"])
    op.create_index("ix_devices_last_activity", "devices", ["last_activity"])

    op.create_table(
        "bandwidth_metrics",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("device_id", sa.Integer(), nullable=True),
        _ts("timestamp"),
        sa.Column("incoming", sa.Float(), nullable=False),
        sa.Column("outgoing", sa.Float(), nullable=False),
        **AUTOINCREMENT,
    )
    op.create_index("ix_bandwidth_metrics_id", "bandwidth_metrics", ["id"])
    op.create_index("ix_bandwidth_metrics_device_id", "bandwidth_metrics", ["device_id"])
    op.create_index("ix_bandwidth_metrics_timestamp", "bandwidth_metrics", ["timestamp"])

    op.create_table(
        "system_metrics",
        sa.Column("id", sa.Integer(), primary_key=True),
        _ts("timestamp"),
        sa.Column("active_devices", sa.Integer(), nullable=False),
        sa.Column("total_bandwidth", sa.Float(), nullable=False),
        sa.Column("warnings", sa.Integer(), nullable=False),
        sa.Column("uptime", sa.Float(), nullable=False),
        **AUTOINCREMENT,
    )
    op.create_index("ix_system_metrics_id", "system_metrics", ["id"])
    op.create_index("ix_system_metrics_timestamp", "system_metrics", ["timestamp"])

    op.create_table(
        "security_events",
        sa.Column("id", sa.Integer(), primary_key=True),
        _ts("timestamp"),
        sa.Column("event_type", sa.String(length=100), nullable=False),
        sa.Column("severity", sa.String(length=16), nullable=False),
        sa.Column("source_ip", sa.String(length=45), nullable=False),
        sa.Column("target_ip", sa.String(length=45), nullable=True),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("device_id", sa.Integer(), nullable=True),
        **AUTOINCREMENT,
    )
    op.create_index("ix_security_events_id", "security_events", ["id"])
    op.create_index("ix_security_events_timestamp", "security_events", ["timestamp"])
    op.create_index("ix_security_events_event_type", "security_events", ["event_type"])
    op.create_index("ix_security_events_severity", "security_events", ["severity"])
    op.create_index("ix_security_events_status", "security_events", ["status"])
    op.create_index("ix_security_events_device_id", "security_events", ["device_id"])

    op.create_table(
        "ids_rules",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("pattern", sa.Text(), nullable=False),
        sa.Column("severity", sa.String(length=16), nullable=False),
        sa.Column("enabled", sa.Boolean(), nullable=False),
        _ts("created_at"),
        _ts("updated_at"),
        **AUTOINCREMENT,
    )
    op.create_index("ix_ids_rules_id", "ids_rules", ["id"])
    op.create_index("ix_ids_rules_name", "ids_rules", ["name"])
    op.create_index("ix_ids_rules_severity", "ids_rules", ["severity"])
    op.create_index("ix_ids_rules_enabled", "ids_rules", ["enabled"])
    op.create_index("ix_ids_rules_created_at", "ids_rules", ["created_at"])

    op.create_table(
        "password_vaults",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        _ts("created_at"),
        _ts("updated_at"),
        **AUTOINCREMENT,
    )
    op.create_index("ix_password_vaults_id", "password_vaults", ["id"])
    op.create_index("ix_password_vaults_name", "password_vaults", ["name"])
    op.create_index("ix_password_vaults_created_at", "password_vaults", ["created_at"])

    op.create_table(
        "password_entries",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "vault_id",
            sa.Integer(),
            sa.ForeignKey("password_vaults.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("username", sa.String(length=255), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("encrypted_password", sa.Text(), nullable=False),
        sa.Column("website", sa.String(length=500), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("category", sa.String(length=100), nullable=True),
        sa.Column("is_favorite", sa.Boolean(), nullable=False),
        _ts("last_used", nullable=True),
        _ts("created_at"),
        _ts("updated_at"),
        **AUTOINCREMENT,
    )
    op.create_index("ix_password_entries_id", "password_entries", ["id"])
    op.create_index("ix_password_entries_vault_id", "password_entries", ["vault_id"])
    op.create_index("ix_password_entries_category", "password_entries", ["category"])
    op.create_index("ix_password_entries_created_at", "password_entries", ["created_at"])


def downgrade() -> None:
    op.drop_table("password_entries")
    op.drop_table("password_vaults")
    op.drop_table("ids_rules")
    op.drop_table("security_events")
    op.drop_table("system_metrics")
    op.drop_table("bandwidth_metrics")
    op.drop_table("devices")
