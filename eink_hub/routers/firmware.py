"""
Firmware routes - endpoints called by the e-Ink devices themselves
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, Request

from eink_hub.dependencies import get_device_service, get_request_id
from eink_hub.device_service import DeviceService
from eink_hub.headers import (
    HEADER_ACCESS_TOKEN,
    HEADER_BATTERY_VOLTAGE,
    HEADER_FW_VERSION,
    HEADER_MAC,
    HEADER_REFRESH_RATE,
    HEADER_RSSI,
)
from eink_hub.models import DisplayResponse, LogResponse, SetupResponse

router = APIRouter(prefix="/api", tags=["Firmware"])
logger = logging.getLogger(__name__)


@router.get("/setup", response_model=SetupResponse)
async def setup(
    mac: Optional[str] = Header(default=None, alias=HEADER_MAC),
    service: DeviceService = Depends(get_device_service),
    request_id: str = Depends(get_request_id),
) -> SetupResponse:
    """
    Register a device.

    Devices without an ID header (or with a blank one) register as virtual
    devices. A MAC that is already registered gets ``status: 404`` with
    null credentials.
    """
    mac = mac.strip() if mac and mac.strip() else None

    return await service.register(mac, request_id)


@router.get("/display", response_model=DisplayResponse)
async def display(
    access_token: str = Header(default="", alias=HEADER_ACCESS_TOKEN),
    rssi: Optional[str] = Header(default=None, alias=HEADER_RSSI),
    fw_version: Optional[str] = Header(default=None, alias=HEADER_FW_VERSION),
    battery_voltage: Optional[str] = Header(default=None, alias=HEADER_BATTERY_VOLTAGE),
    refresh_rate: Optional[str] = Header(default=None, alias=HEADER_REFRESH_RATE),
    service: DeviceService = Depends(get_device_service),
    request_id: str = Depends(get_request_id),
) -> DisplayResponse:
    """
    Device check-in.

    Stores the reported telemetry and returns the next image of the
    device's playlist. Unknown access tokens get ``status: 500`` in an
    HTTP 200 body.
    """
    return await service.check_in(
        access_token=access_token,
        rssi=rssi,
        fw_version=fw_version,
        battery_voltage=battery_voltage,
        refresh_rate=refresh_rate,
        request_id=request_id,
    )


@router.post("/log", response_model=LogResponse)
async def submit_log(
    request: Request,
    mac: Optional[str] = Header(default=None, alias=HEADER_MAC),
    request_id: str = Depends(get_request_id),
) -> LogResponse:
    """
    Accept a device log upload.

    The payload is read and discarded; the response is always a success.
    """
    body = await request.body()

    logger.info(
        "Accepted logs request",
        extra={"req_id": request_id, "mac": mac, "size": len(body)},
    )

    return LogResponse()
