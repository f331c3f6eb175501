"""Device Routes — CRUD and filtered listing under /devices.

Invariants:
    - POST → 201, GET/PUT/PATCH → 200 with DeviceResponse, DELETE → 204 with empty body
    - `state` query parameter parsed case-insensitively; unknown token → 400; empty → unset
    - `device_id` outside the signed 64-bit range → 400
    - Routes contain no policy: guards and error classification live in DeviceService

Design Decisions:
    - DELETE returns 204 (no pre-image body): matches the documented contract
    - Error responses declared per route so the OpenAPI document lists them
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from devices_api.api.dependencies import get_device_service
from devices_api.core.domain_types import DeviceId, parse_state
from devices_api.schemas.device import (
    CreateDeviceRequest, DeviceResponse, ErrorResponse, PartialUpdateDeviceRequest,
)
from devices_api.services.device_service import DeviceService

router = APIRouter(prefix="/devices", tags=["devices"])

_INVALID = {400: {"model": ErrorResponse, "description": "Invalid input."}}
_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Device was not found."}}
_CONFLICT = {409: {"model": ErrorResponse, "description": "Device with the same name and brand exists."}}
_LOCKED = {423: {"model": ErrorResponse, "description": "Device cannot be changed while IN_USE."}}

# Device ids are signed 64-bit; anything outside is rejected before reaching the store
DevicePathId = Annotated[int, Path(ge=-(2**63), le=2**63 - 1)]


@router.post(
    "", response_model=DeviceResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**_INVALID, **_CONFLICT},
)
async def create_device(
    body: CreateDeviceRequest,
    service: DeviceService = Depends(get_device_service),
):
    """Create a device and return it with all fields."""
    return await service.create(body)


@router.get(
    "", response_model=list[DeviceResponse], responses=_INVALID,
)
async def list_devices(
    brand: str | None = Query(None, description="Filter by device brand", examples=["Apple"]),
    state: str | None = Query(None, description="Filter by device state", examples=["available"]),
    service: DeviceService = Depends(get_device_service),
):
    """List devices, optionally filtered by `brand` and/or `state`."""
    parsed_state = parse_state(state) if state else None
    return await service.list_devices(brand=brand, state=parsed_state)


@router.get(
    "/{device_id}", response_model=DeviceResponse, responses=_NOT_FOUND,
)
async def get_device(
    device_id: DevicePathId, service: DeviceService = Depends(get_device_service),
):
    return await service.get_by_id(DeviceId(device_id))


@router.put(
    "/{device_id}", response_model=DeviceResponse,
    responses={**_INVALID, **_NOT_FOUND, **_CONFLICT, **_LOCKED},
)
async def replace_device(
    device_id: DevicePathId,
    body: CreateDeviceRequest,
    service: DeviceService = Depends(get_device_service),
):
    """Fully replace a device. Rejected with 423 while the device is IN_USE."""
    return await service.full_replace(DeviceId(device_id), body)


@router.patch(
    "/{device_id}", response_model=DeviceResponse,
    responses={**_INVALID, **_NOT_FOUND, **_CONFLICT, **_LOCKED},
)
async def partial_update_device(
    device_id: DevicePathId,
    body: PartialUpdateDeviceRequest,
    service: DeviceService = Depends(get_device_service),
):
    """Partially update a device. While IN_USE only `state` may change."""
    return await service.partial_update(DeviceId(device_id), body)


@router.delete(
    "/{device_id}", status_code=status.HTTP_204_NO_CONTENT,
    responses={**_NOT_FOUND, **_LOCKED},
)
async def delete_device(
    device_id: DevicePathId, service: DeviceService = Depends(get_device_service),
):
    """Delete a device. Rejected with 423 while the device is IN_USE."""
    await service.delete(DeviceId(device_id))
