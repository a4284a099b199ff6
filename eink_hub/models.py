"""
Pydantic models for devices and the firmware-facing API payloads.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

DEFAULT_REFRESH_RATE = "1800"
SETUP_FILENAME = "empty_state"

# Sentinel values carried in the JSON "status" field
SETUP_REGISTERED = 200
SETUP_ALREADY_REGISTERED = 404
DISPLAY_OK = 0
DISPLAY_UNPROVISIONED = 500


# Device Models
class Device(BaseModel):
    """A registered device as returned by the repository."""

    id: str
    mac: Optional[str] = None
    api_key: str
    rssi: Optional[int] = None
    battery_voltage: Optional[float] = None
    fw_version: Optional[str] = None
    refresh_rate: Optional[int] = None
    images: List[str] = Field(default_factory=list)


class DeviceInfo(BaseModel):
    """Public projection of a device (no credentials, no playlist)."""

    id: str
    mac: Optional[str] = None
    rssi: Optional[int] = None
    battery_voltage: Optional[float] = None
    fw_version: Optional[str] = None
    refresh_rate: Optional[int] = None

    @classmethod
    def from_device(cls, device: Device) -> "DeviceInfo":
        return cls(
            id=device.id,
            mac=device.mac,
            rssi=device.rssi,
            battery_voltage=device.battery_voltage,
            fw_version=device.fw_version,
            refresh_rate=device.refresh_rate,
        )


class Telemetry(BaseModel):
    """Telemetry fields that parsed successfully; None means not reported."""

    rssi: Optional[int] = None
    battery_voltage: Optional[float] = None
    fw_version: Optional[str] = None
    refresh_rate: Optional[int] = None


# Firmware API Models
class SetupResponse(BaseModel):
    status: int
    api_key: Optional[str] = None
    friendly_id: Optional[str] = None
    image_url: Optional[str] = None
    filename: Optional[str] = None

    @classmethod
    def already_registered(cls) -> "SetupResponse":
        return cls(status=SETUP_ALREADY_REGISTERED)


class DisplayResponse(BaseModel):
    status: int
    image_url: str
    filename: str
    update_firmware: bool = False
    firmware_url: Optional[str] = None
    refresh_rate: str = DEFAULT_REFRESH_RATE
    reset_firmware: bool = False


class LogResponse(BaseModel):
    status: int = 200
    msg: str = "log received"
