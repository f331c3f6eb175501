"""API Dependencies — per-request wiring of the device service.

Invariants:
    - One DeviceService per request, bound to the request's AsyncSession
    - Repository and mapper passed explicitly (no module-level service instance)
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from devices_api.core.device_mapper import DeviceMapper
from devices_api.infrastructure.database import get_db
from devices_api.infrastructure.device_repository import SqlDeviceRepository
from devices_api.services.device_service import DeviceService


def get_device_service(db: AsyncSession = Depends(get_db)) -> DeviceService:
    return DeviceService(SqlDeviceRepository(db), DeviceMapper())
