"""Device Schemas — Pydantic request/response views for the /devices API boundary.

Invariants:
    - CreateDeviceRequest.name/brand: required, not blank
    - PartialUpdateDeviceRequest: every field optional; None means "do not change"
    - state accepts the wire spellings case-insensitively; unknown tokens fail validation
    - DeviceResponse never exposes persistence internals beyond id and createdAt

Design Decisions:
    - Views kept separate from DeviceEntity: the wire shape can change without touching the core
    - state parsed through core parse_state: one parser for body and query string
    - Blank strings are rejected, not stripped: stored values are exactly what the client sent
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from devices_api.core.domain_types import State, parse_state
from devices_api.core.errors import InvalidInputError


def _parse_state_field(v: object) -> object:
    if v is None or isinstance(v, State):
        return v
    try:
        return parse_state(v)  # type: ignore[arg-type]
    except InvalidInputError as e:
        raise ValueError(e.message) from e


def _reject_blank(v: str | None) -> str | None:
    if v is not None and not v.strip():
        raise ValueError("must not be blank")
    return v


class CreateDeviceRequest(BaseModel):
    """Create / full-replace body."""
    name: str = Field(description="Name of the device")
    brand: str = Field(description="Device brand")
    state: State | None = Field(
        None, description="Current state of the device", examples=["available"],
    )

    @field_validator("name", "brand")
    @classmethod
    def reject_blank(cls, v: str | None) -> str | None:
        return _reject_blank(v)

    @field_validator("state", mode="before")
    @classmethod
    def parse_state_token(cls, v: object) -> object:
        return _parse_state_field(v)


class PartialUpdateDeviceRequest(BaseModel):
    """Partial update body — absent fields keep their stored value."""
    name: str | None = Field(None, description="Name of the device")
    brand: str | None = Field(None, description="Device brand")
    state: State | None = Field(None, description="Current state of the device")

    @field_validator("name", "brand")
    @classmethod
    def reject_blank(cls, v: str | None) -> str | None:
        return _reject_blank(v)

    @field_validator("state", mode="before")
    @classmethod
    def parse_state_token(cls, v: object) -> object:
        return _parse_state_field(v)


class DeviceResponse(BaseModel):
    """Device as returned by every /devices endpoint."""
    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(description="Unique identifier of the device", examples=[1])
    name: str
    brand: str
    state: str = Field(examples=["available"])
    created_at: str | None = Field(
        None, alias="createdAt", examples=["2024-01-01T12:00:00Z"],
    )


class ErrorResponse(BaseModel):
    """Error envelope shared by all non-2xx responses."""
    message: str
    details: str
