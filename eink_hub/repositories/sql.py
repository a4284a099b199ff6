"""
SQLAlchemy-backed device repository.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from eink_hub.db_models import Device as DeviceModel
from eink_hub.exceptions import ConflictError, StoreError
from eink_hub.models import Device

logger = logging.getLogger(__name__)


@contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    """Translate SQLAlchemy failures into the repository error types."""
    try:
        yield
    except IntegrityError as e:
        raise ConflictError(f"{operation}: {e.orig}") from e
    except SQLAlchemyError as e:
        logger.debug(f"Store operation {operation} failed: {e}")
        raise StoreError(f"{operation} failed") from e


class SqlAlchemyDeviceRepository:
    """DeviceRepository over an async SQLAlchemy session factory."""

    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]):
        self._sessionmaker = sessionmaker

    async def create(self, id: str, mac: Optional[str], api_key: str) -> None:
        with _store_errors("create"):
            async with self._sessionmaker() as session:
                session.add(DeviceModel(id=id, mac=mac, api_key=api_key, images=[]))
                await session.commit()

    async def exists_by_mac(self, mac: str) -> bool:
        with _store_errors("exists_by_mac"):
            async with self._sessionmaker() as session:
                count = await session.scalar(
                    select(func.count()).select_from(DeviceModel).where(DeviceModel.mac == mac)
                )
        return bool(count)

    async def get_by_api_key(self, api_key: str) -> Optional[Device]:
        with _store_errors("get_by_api_key"):
            async with self._sessionmaker() as session:
                row = await session.scalar(
                    select(DeviceModel)
                    .where(DeviceModel.api_key == api_key)
                    .order_by(DeviceModel.id)
                    .limit(1)
                )
        return row.to_schema() if row else None

    async def get_by_id(self, id: str) -> Optional[Device]:
        with _store_errors("get_by_id"):
            async with self._sessionmaker() as session:
                row = await session.get(DeviceModel, id)
        return row.to_schema() if row else None

    async def list(self) -> List[Device]:
        with _store_errors("list"):
            async with self._sessionmaker() as session:
                rows = (
                    await session.scalars(select(DeviceModel).order_by(DeviceModel.id))
                ).all()
        return [row.to_schema() for row in rows]

    async def update_images(self, id: str, images: Sequence[str]) -> None:
        with _store_errors("update_images"):
            async with self._sessionmaker() as session:
                await session.execute(
                    update(DeviceModel)
                    .where(DeviceModel.id == id)
                    .values(images=list(images))
                )
                await session.commit()

    async def update_status(
        self,
        id: str,
        rssi: Optional[int] = None,
        battery_voltage: Optional[float] = None,
        fw_version: Optional[str] = None,
        refresh_rate: Optional[int] = None,
    ) -> None:
        reported = {
            "rssi": rssi,
            "battery_voltage": battery_voltage,
            "fw_version": fw_version,
            "refresh_rate": refresh_rate,
        }
        # Only overwrite what the device actually sent
        values = {column: value for column, value in reported.items() if value is not None}
        if not values:
            return

        with _store_errors("update_status"):
            async with self._sessionmaker() as session:
                await session.execute(
                    update(DeviceModel).where(DeviceModel.id == id).values(**values)
                )
                await session.commit()
