"""
Device repositories
"""

from eink_hub.repositories.base import DeviceRepository
from eink_hub.repositories.memory import InMemoryDeviceRepository
from eink_hub.repositories.sql import SqlAlchemyDeviceRepository

__all__ = [
    "DeviceRepository",
    "InMemoryDeviceRepository",
    "SqlAlchemyDeviceRepository",
]
