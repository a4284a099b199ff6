"""
Routers Package
"""

from eink_hub.routers.devices import router as devices_router
from eink_hub.routers.firmware import router as firmware_router

__all__ = [
    "devices_router",
    "firmware_router",
]
