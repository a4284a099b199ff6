"""
In-memory device repository for development and testing.

Selected with DATABASE_URL=memory://. Data is lost on restart.
"""

from threading import Lock
from typing import Dict, List, Optional, Sequence

from eink_hub.exceptions import ConflictError
from eink_hub.models import Device


class InMemoryDeviceRepository:
    """DeviceRepository backed by a dict of device_id -> Device."""

    def __init__(self) -> None:
        self._devices: Dict[str, Device] = {}
        self._lock = Lock()

    async def create(self, id: str, mac: Optional[str], api_key: str) -> None:
        with self._lock:
            if id in self._devices:
                raise ConflictError(f"create: device id '{id}' already exists")
            if mac is not None and any(d.mac == mac for d in self._devices.values()):
                raise ConflictError(f"create: mac '{mac}' already registered")
            self._devices[id] = Device(id=id, mac=mac, api_key=api_key)

    async def exists_by_mac(self, mac: str) -> bool:
        with self._lock:
            return any(d.mac == mac for d in self._devices.values())

    async def get_by_api_key(self, api_key: str) -> Optional[Device]:
        with self._lock:
            for device_id in sorted(self._devices):
                device = self._devices[device_id]
                if device.api_key == api_key:
                    return device.model_copy(deep=True)
        return None

    async def get_by_id(self, id: str) -> Optional[Device]:
        with self._lock:
            device = self._devices.get(id)
            return device.model_copy(deep=True) if device else None

    async def list(self) -> List[Device]:
        with self._lock:
            return [
                self._devices[device_id].model_copy(deep=True)
                for device_id in sorted(self._devices)
            ]

    async def update_images(self, id: str, images: Sequence[str]) -> None:
        with self._lock:
            device = self._devices.get(id)
            if device:
                device.images = list(images)

    async def update_status(
        self,
        id: str,
        rssi: Optional[int] = None,
        battery_voltage: Optional[float] = None,
        fw_version: Optional[str] = None,
        refresh_rate: Optional[int] = None,
    ) -> None:
        with self._lock:
            device = self._devices.get(id)
            if not device:
                return
            if rssi is not None:
                device.rssi = rssi
            if battery_voltage is not None:
                device.battery_voltage = battery_voltage
            if fw_version is not None:
                device.fw_version = fw_version
            if refresh_rate is not None:
                device.refresh_rate = refresh_rate
