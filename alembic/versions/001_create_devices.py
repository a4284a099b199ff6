"""
Create devices table

Revision ID: 001_create_devices
Revises:
Create Date: 2026-10-18

This migration creates the single table backing the device store:
- Friendly id as primary key
- Optional, unique MAC (NULL for virtual devices)
- API key (indexed, used for check-in lookups)
- Last reported telemetry
- Playlist as a JSON array
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = "001_create_devices"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "devices",
        sa.Column("id", sa.String(6), primary_key=True),
        sa.Column("mac", sa.String(64), nullable=True),
        sa.Column("api_key", sa.String(64), nullable=False),
        sa.Column("rssi", sa.Integer(), nullable=True),
        sa.Column("battery_voltage", sa.Float(), nullable=True),
        sa.Column("fw_version", sa.String(50), nullable=True),
        sa.Column("refresh_rate", sa.Integer(), nullable=True),
        sa.Column("images", sa.JSON(), nullable=False, server_default="[]"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )

    # NULL MACs (virtual devices) never collide on a unique index
    op.create_index("ix_devices_mac", "devices", ["mac"], unique=True)
    op.create_index("ix_devices_api_key", "devices", ["api_key"])


def downgrade() -> None:
    op.drop_index("ix_devices_api_key", table_name="devices")
    op.drop_index("ix_devices_mac", table_name="devices")
    op.drop_table("devices")
