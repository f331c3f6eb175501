"""SQL Device Repository — SQLAlchemy implementation of the DeviceRepository protocol.

Invariants:
    - Uniqueness of (name, brand) is checked by the database inside the write's transaction
    - IntegrityError → rollback → IntegrityViolation; nothing else is translated here
    - Replace copies name/brand/state onto the stored row; created_at is never assigned
    - Rows leave this module only as DeviceEntity (ORM objects never reach the core)

Design Decisions:
    - One repository per AsyncSession: the request-scoped session is owned by get_db
    - Commit per write: each service operation performs at most one write
"""

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from devices_api.core.domain_types import DeviceEntity, DeviceId, State
from devices_api.core.errors import IntegrityViolation
from devices_api.models.device import Device

logger = logging.getLogger(__name__)


def _to_entity(row: Device) -> DeviceEntity:
    return DeviceEntity(
        id=DeviceId(row.id),
        name=row.name,
        brand=row.brand,
        state=State(row.state),
        created_at=row.created_at,
    )


class SqlDeviceRepository:
    """DeviceRepository over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def save(self, device: DeviceEntity) -> DeviceEntity:
        row = await self.db.get(Device, device.id) if device.id is not None else None
        if row is None:
            row = Device(
                id=device.id,
                name=device.name,
                brand=device.brand,
                state=device.state.value,
            )
            self.db.add(row)
        else:
            row.name = device.name
            row.brand = device.brand
            row.state = device.state.value

        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(
                "Unique constraint rejected device write",
                extra={"device_id": device.id, "brand": device.brand},
            )
            raise IntegrityViolation(str(e.orig)) from e

        await self.db.refresh(row)
        return _to_entity(row)

    async def find_by_id(self, device_id: DeviceId) -> DeviceEntity | None:
        row = await self.db.get(Device, device_id)
        return _to_entity(row) if row else None

    async def find_all(self) -> list[DeviceEntity]:
        return await self._find(select(Device))

    async def find_by_brand(self, brand: str) -> list[DeviceEntity]:
        return await self._find(select(Device).where(Device.brand == brand))

    async def find_by_state(self, state: str) -> list[DeviceEntity]:
        return await self._find(select(Device).where(Device.state == state))

    async def find_by_brand_and_state(
        self, brand: str, state: str,
    ) -> list[DeviceEntity]:
        return await self._find(
            select(Device)
            .where(Device.brand == brand)
            .where(Device.state == state)
        )

    async def delete_by_id(self, device_id: DeviceId) -> None:
        await self.db.execute(delete(Device).where(Device.id == device_id))
        await self.db.commit()

    async def _find(self, query) -> list[DeviceEntity]:
        result = await self.db.execute(query)
        return [_to_entity(row) for row in result.scalars().all()]
