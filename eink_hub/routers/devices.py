"""
Device routes - inventory and playlist management
"""

from typing import List

from fastapi import APIRouter, Body, Depends, HTTPException, status

from eink_hub.dependencies import get_device_service, get_request_id
from eink_hub.device_service import DeviceService
from eink_hub.models import DeviceInfo

router = APIRouter(prefix="/api/devices", tags=["Devices"])


@router.get("", response_model=List[DeviceInfo])
async def list_devices(
    service: DeviceService = Depends(get_device_service),
) -> List[DeviceInfo]:
    """List all registered devices, ordered by id."""
    return await service.list_devices()


@router.get("/{device_id}", response_model=DeviceInfo)
async def get_device(
    device_id: str,
    service: DeviceService = Depends(get_device_service),
) -> DeviceInfo:
    """Get a device with its last reported telemetry."""
    device = await service.get_device(device_id)

    if not device:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Device not found",
        )

    return device


@router.get("/{device_id}/images", response_model=List[str])
async def get_device_images(
    device_id: str,
    service: DeviceService = Depends(get_device_service),
) -> List[str]:
    """Get the device's playlist."""
    images = await service.get_images(device_id)

    if images is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Device not found",
        )

    return images


@router.put("/{device_id}/images", response_model=List[str])
async def put_device_images(
    device_id: str,
    images: List[str] = Body(...),
    service: DeviceService = Depends(get_device_service),
    request_id: str = Depends(get_request_id),
) -> List[str]:
    """
    Replace the device's playlist.

    The rotation position is kept; on a shorter playlist it wraps around.
    """
    return await service.replace_images(device_id, images, request_id)
