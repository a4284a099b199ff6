"""
Repository protocol for device persistence operations.

Every method may raise StoreError; ``create`` raises ConflictError (a
StoreError) when the id or MAC is already taken.
"""

from typing import List, Optional, Protocol, Sequence

from eink_hub.models import Device


class DeviceRepository(Protocol):
    async def create(self, id: str, mac: Optional[str], api_key: str) -> None:
        """Insert a new device."""
        ...

    async def exists_by_mac(self, mac: str) -> bool:
        ...

    async def get_by_api_key(self, api_key: str) -> Optional[Device]:
        ...

    async def get_by_id(self, id: str) -> Optional[Device]:
        ...

    async def list(self) -> List[Device]:
        """All devices ordered by id."""
        ...

    async def update_images(self, id: str, images: Sequence[str]) -> None:
        """Replace the playlist. Unknown ids are ignored."""
        ...

    async def update_status(
        self,
        id: str,
        rssi: Optional[int] = None,
        battery_voltage: Optional[float] = None,
        fw_version: Optional[str] = None,
        refresh_rate: Optional[int] = None,
    ) -> None:
        """
        Merge a telemetry report into the stored snapshot.

        Fields passed as None keep their stored value. Unknown ids are ignored.
        """
        ...
