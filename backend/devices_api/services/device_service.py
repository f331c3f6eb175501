"""Device Service — lifecycle policy for create, read, list, replace, patch and delete.

Invariants:
    - Every mutation of an existing device loads it first (NotFound before any guard)
    - IN_USE guards apply to the EXISTING state (core/enforce_device_lock.py)
    - Only IntegrityViolation is caught (→ DuplicateDeviceError); everything else propagates
    - Uniqueness is never pre-checked here: the store owns it

Design Decisions:
    - Repository and mapper injected through the constructor (ADR: no process-wide singletons)
    - Read-then-write is not serialized: concurrent mutators may see the same pre-image;
      the unique constraint is the only hard race guard
"""

import logging

from devices_api.core.device_mapper import DeviceMapper
from devices_api.core.domain_types import DeviceEntity, DeviceId, State
from devices_api.core.enforce_device_lock import (
    check_delete_allowed,
    check_partial_update_allowed,
    check_replace_allowed,
)
from devices_api.core.errors import (
    DuplicateDeviceError, ErrorContext, IntegrityViolation, ResourceNotFoundError,
)
from devices_api.core.repository_protocols import DeviceRepository
from devices_api.schemas.device import (
    CreateDeviceRequest, DeviceResponse, PartialUpdateDeviceRequest,
)

logger = logging.getLogger(__name__)


class DeviceService:
    """Policy layer between the /devices routes and the device store."""

    def __init__(self, repository: DeviceRepository, mapper: DeviceMapper):
        self.repository = repository
        self.mapper = mapper

    async def create(self, request: CreateDeviceRequest) -> DeviceResponse:
        """Persist a new device; state defaults to INACTIVE."""
        logger.info(
            "Creating device",
            extra={"device_name": request.name, "brand": request.brand},
        )
        saved = await self._save(self.mapper.to_entity(request))
        logger.info("Created device", extra={"device_id": saved.id})
        return self.mapper.to_response(saved)

    async def get_by_id(self, device_id: DeviceId) -> DeviceResponse:
        return self.mapper.to_response(await self._load(device_id))

    async def list_devices(
        self, brand: str | None = None, state: State | None = None,
    ) -> list[DeviceResponse]:
        """List devices, optionally filtered by exact brand and/or state."""
        if brand is not None and state is not None:
            entities = await self.repository.find_by_brand_and_state(brand, state.wire)
        elif brand is not None:
            entities = await self.repository.find_by_brand(brand)
        elif state is not None:
            entities = await self.repository.find_by_state(state.wire)
        else:
            entities = await self.repository.find_all()

        logger.info(
            f"Found {len(entities)} devices matching criteria",
            extra={"brand": brand, "state": state},
        )
        return [self.mapper.to_response(e) for e in entities]

    async def full_replace(
        self, device_id: DeviceId, request: CreateDeviceRequest,
    ) -> DeviceResponse:
        """Replace name, brand and state. Blocked while the device is IN_USE."""
        existing = await self._load(device_id)
        check_replace_allowed(existing)

        saved = await self._save(self.mapper.to_entity(request, device_id))
        logger.info("Replaced device", extra={"device_id": device_id})
        return self.mapper.to_response(saved)

    async def partial_update(
        self, device_id: DeviceId, request: PartialUpdateDeviceRequest,
    ) -> DeviceResponse:
        """Apply the fields present in the request.

        On an IN_USE device only `state` may change; that is how the lock is released.
        """
        logger.info("Starting partial update", extra={"device_id": device_id})
        existing = await self._load(device_id)
        check_partial_update_allowed(
            existing,
            changes_name=request.name is not None,
            changes_brand=request.brand is not None,
        )

        saved = await self._save(self.mapper.merge_partial(request, existing))
        logger.info(
            "Completed partial update",
            extra={"device_id": device_id, "state": saved.state},
        )
        return self.mapper.to_response(saved)

    async def delete(self, device_id: DeviceId) -> None:
        """Delete a device. Blocked while the device is IN_USE."""
        existing = await self._load(device_id)
        check_delete_allowed(existing)

        await self.repository.delete_by_id(device_id)
        logger.info("Deleted device", extra={"device_id": device_id})

    # ─── Helpers ────────────────────────────────────────────────

    async def _load(self, device_id: DeviceId) -> DeviceEntity:
        entity = await self.repository.find_by_id(device_id)
        if entity is None:
            raise ResourceNotFoundError(
                "Device", device_id, ErrorContext(device_id=device_id),
            )
        return entity

    async def _save(self, entity: DeviceEntity) -> DeviceEntity:
        try:
            return await self.repository.save(entity)
        except IntegrityViolation as e:
            logger.warning(
                "Data integrity violation while saving device",
                extra={"device_id": entity.id, "error_code": "DUPLICATE_DEVICE"},
            )
            raise DuplicateDeviceError(ErrorContext(device_id=entity.id)) from e
