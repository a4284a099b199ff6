"""
Device Service - registration, check-in and playlist operations.

This module handles:
- Registering new devices (setup)
- Device check-ins: telemetry merge and playlist rotation (display)
- Inventory and playlist reads/writes

Repository failures (StoreError) are not caught here; they abort the
request and are turned into a generic error response by the app.
"""

import logging
import math
import re
import time
from typing import Callable, List, Optional

from eink_hub.identifiers import IdentifierSource
from eink_hub.models import (
    DEFAULT_REFRESH_RATE,
    DISPLAY_OK,
    DISPLAY_UNPROVISIONED,
    SETUP_FILENAME,
    SETUP_REGISTERED,
    DeviceInfo,
    DisplayResponse,
    SetupResponse,
    Telemetry,
)
from eink_hub.repositories import DeviceRepository
from eink_hub.rotation import RotationCursorTable

logger = logging.getLogger(__name__)


# Telemetry columns are 32-bit; larger values would not fit the store.
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_FLOAT_PATTERN = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


def _parse_int(raw: Optional[str]) -> Optional[int]:
    if raw is None or not _INT_PATTERN.fullmatch(raw.strip()):
        return None
    value = int(raw.strip())
    return value if INT32_MIN <= value <= INT32_MAX else None


def _parse_float(raw: Optional[str]) -> Optional[float]:
    if raw is None or not _FLOAT_PATTERN.fullmatch(raw.strip()):
        return None
    value = float(raw.strip())
    return value if math.isfinite(value) else None


def _parse_text(raw: Optional[str]) -> Optional[str]:
    if raw is None or not raw.strip():
        return None
    return raw.strip()


def parse_telemetry(
    rssi: Optional[str] = None,
    battery_voltage: Optional[str] = None,
    fw_version: Optional[str] = None,
    refresh_rate: Optional[str] = None,
) -> Telemetry:
    """
    Parse raw header values into a Telemetry report.

    Each field is parsed on its own; a value that does not parse is
    reported as missing instead of failing the whole report.
    """
    return Telemetry(
        rssi=_parse_int(rssi),
        battery_voltage=_parse_float(battery_voltage),
        fw_version=_parse_text(fw_version),
        refresh_rate=_parse_int(refresh_rate),
    )


def effective_refresh_rate(raw: Optional[str]) -> str:
    """Echo the device's requested refresh rate, or the default."""
    if raw is None or not raw.strip():
        return DEFAULT_REFRESH_RATE
    return raw.strip()


class DeviceService:
    """Registration and check-in state machine on top of a DeviceRepository."""

    def __init__(
        self,
        repository: DeviceRepository,
        rotation: RotationCursorTable,
        identifiers: IdentifierSource,
        default_image_url: str,
        clock: Callable[[], float] = time.time,
    ):
        """
        Args:
            repository: Device persistence.
            rotation: Shared playlist cursors.
            identifiers: Source of friendly IDs and API keys.
            default_image_url: Image for setup, unprovisioned devices and empty playlists.
            clock: Returns seconds since the epoch; used for the filename token.
        """
        self.repository = repository
        self.rotation = rotation
        self.identifiers = identifiers
        self.default_image_url = default_image_url
        self.clock = clock

    def freshness_token(self) -> str:
        return str(int(self.clock()))

    async def register(self, mac: Optional[str], request_id: str) -> SetupResponse:
        """
        Register a device.

        A known MAC gets the already-registered response and nothing is
        written. A new MAC, or no MAC at all (virtual device), gets a fresh
        friendly ID and API key.
        """
        if mac is not None and await self.repository.exists_by_mac(mac):
            logger.info(
                "Device setup attempted for existing device",
                extra={"req_id": request_id, "mac": mac},
            )
            return SetupResponse.already_registered()

        device_id = self.identifiers.friendly_id()
        api_key = self.identifiers.api_key()

        await self.repository.create(device_id, mac, api_key)

        logger.info(
            "Device successfully registered",
            extra={"req_id": request_id, "mac": mac, "id": device_id},
        )

        return SetupResponse(
            status=SETUP_REGISTERED,
            api_key=api_key,
            friendly_id=device_id,
            image_url=self.default_image_url,
            filename=SETUP_FILENAME,
        )

    async def check_in(
        self,
        access_token: str,
        rssi: Optional[str],
        fw_version: Optional[str],
        battery_voltage: Optional[str],
        refresh_rate: Optional[str],
        request_id: str,
    ) -> DisplayResponse:
        """
        Handle a periodic device check-in.

        Unknown tokens get a 200 response whose ``status`` is the
        unprovisioned sentinel, since the firmware does not act on HTTP
        error codes.
        """
        refresh = effective_refresh_rate(refresh_rate)
        filename = self.freshness_token()

        device = await self.repository.get_by_api_key(access_token)

        if device is None:
            logger.info(
                "Rejecting display request",
                extra={
                    "req_id": request_id,
                    "rssi": rssi,
                    "fw_version": fw_version,
                    "battery_voltage": battery_voltage,
                    "refresh_rate": refresh,
                },
            )
            return DisplayResponse(
                status=DISPLAY_UNPROVISIONED,
                image_url=self.default_image_url,
                filename=filename,
                refresh_rate=refresh,
            )

        telemetry = parse_telemetry(
            rssi=rssi,
            battery_voltage=battery_voltage,
            fw_version=fw_version,
            refresh_rate=refresh_rate,
        )
        await self.repository.update_status(
            device.id,
            rssi=telemetry.rssi,
            battery_voltage=telemetry.battery_voltage,
            fw_version=telemetry.fw_version,
            refresh_rate=telemetry.refresh_rate,
        )

        image_url = self.rotation.select(device.id, device.images, self.default_image_url)

        logger.info(
            "Processing display request",
            extra={
                "req_id": request_id,
                "id": device.id,
                "mac": device.mac,
                "rssi": telemetry.rssi,
                "fw_version": telemetry.fw_version,
                "battery_voltage": telemetry.battery_voltage,
                "refresh_rate": refresh,
                "image_url": image_url,
                "display_filename": filename,
            },
        )

        return DisplayResponse(
            status=DISPLAY_OK,
            image_url=image_url,
            filename=filename,
            update_firmware=False,
            firmware_url=None,
            refresh_rate=refresh,
            reset_firmware=False,
        )

    async def list_devices(self) -> List[DeviceInfo]:
        devices = await self.repository.list()
        return [DeviceInfo.from_device(device) for device in devices]

    async def get_device(self, device_id: str) -> Optional[DeviceInfo]:
        device = await self.repository.get_by_id(device_id)
        return DeviceInfo.from_device(device) if device else None

    async def get_images(self, device_id: str) -> Optional[List[str]]:
        device = await self.repository.get_by_id(device_id)
        return list(device.images) if device else None

    async def replace_images(self, device_id: str, images: List[str], request_id: str) -> List[str]:
        """Replace a playlist. The rotation cursor is kept and wraps on the new length."""
        await self.repository.update_images(device_id, images)
        logger.info(
            "Device playlist replaced",
            extra={"req_id": request_id, "id": device_id, "count": len(images)},
        )
        return images
