"""
SQLAlchemy ORM models for the device store.
"""

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Float, Integer, String

from eink_hub.database import Base
from eink_hub.models import Device as DeviceSchema


class Device(Base):
    """Registered e-Ink display (physical or virtual)."""

    __tablename__ = "devices"

    # Friendly ID, e.g. "A1B2C3"
    id = Column(String(6), primary_key=True)
    # NULL for virtual devices; NULLs never collide on the unique index
    mac = Column(String(64), unique=True, nullable=True, index=True)
    api_key = Column(String(64), nullable=False, index=True)

    # Last reported telemetry
    rssi = Column(Integer, nullable=True)
    battery_voltage = Column(Float, nullable=True)
    fw_version = Column(String(50), nullable=True)
    refresh_rate = Column(Integer, nullable=True)

    # Playlist of image references
    images = Column(JSON, nullable=False, default=list)

    # Timestamps
    created_at = Column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    def to_schema(self) -> DeviceSchema:
        """Convert to the storage-independent Device model."""
        return DeviceSchema(
            id=self.id,
            mac=self.mac,
            api_key=self.api_key,
            rssi=self.rssi,
            battery_voltage=self.battery_voltage,
            fw_version=self.fw_version,
            refresh_rate=self.refresh_rate,
            images=list(self.images or []),
        )
