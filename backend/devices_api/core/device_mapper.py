"""Device Mapper — pure conversions between request views, entities and response views.

Invariants:
    - No IO, no DB: every method is a pure function of its arguments
    - Absent state on create/replace defaults to INACTIVE
    - merge_partial keeps id and created_at of the existing entity
    - createdAt rendered in UTC as YYYY-MM-DDTHH:MM:SSZ; naive timestamps are read as UTC
"""

from dataclasses import replace
from datetime import datetime, timezone

from devices_api.core.domain_types import DEFAULT_STATE, DeviceEntity, DeviceId
from devices_api.schemas.device import (
    CreateDeviceRequest, DeviceResponse, PartialUpdateDeviceRequest,
)

CREATED_AT_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


class DeviceMapper:
    """Stateless mapper injected into DeviceService."""

    def to_entity(
        self, request: CreateDeviceRequest, device_id: DeviceId | None = None,
    ) -> DeviceEntity:
        return DeviceEntity(
            id=device_id,
            name=request.name,
            brand=request.brand,
            state=request.state or DEFAULT_STATE,
        )

    def merge_partial(
        self, request: PartialUpdateDeviceRequest, existing: DeviceEntity,
    ) -> DeviceEntity:
        return replace(
            existing,
            name=request.name if request.name is not None else existing.name,
            brand=request.brand if request.brand is not None else existing.brand,
            state=request.state if request.state is not None else existing.state,
        )

    def to_response(self, entity: DeviceEntity) -> DeviceResponse:
        return DeviceResponse(
            id=entity.id,
            name=entity.name,
            brand=entity.brand,
            state=entity.state.wire,
            created_at=format_created_at(entity.created_at),
        )


def format_created_at(created_at: datetime | None) -> str | None:
    if created_at is None:
        return None
    if created_at.tzinfo is None:
        # SQLite hands back naive datetimes; rows are always written in UTC
        created_at = created_at.replace(tzinfo=timezone.utc)
    return created_at.astimezone(timezone.utc).strftime(CREATED_AT_FORMAT)
