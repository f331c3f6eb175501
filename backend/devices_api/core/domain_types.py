"""Domain Types — device state model and the core device entity.

Invariants:
    - State is a closed set of 3 values; wire spellings are lowercase
    - parse_state is case-insensitive over the 3 wire spellings only
    - There is no ordering and no transition graph between states
    - DeviceEntity is immutable: every write produces a new entity

Design Decisions:
    - str Enum with wire value: serializes to JSON without custom encoders
    - DeviceEntity as frozen dataclass: core never depends on the ORM row type
      (ADR: dependency arrows point inward)
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import NewType

from devices_api.core.errors import InvalidInputError


# ─── Identity Types ──────────────────────────────────────────────

DeviceId = NewType("DeviceId", int)


# ─── Enums ───────────────────────────────────────────────────────

class State(str, Enum):
    """Device lifecycle states — value is the wire spelling and DB column value."""
    AVAILABLE = "available"
    IN_USE = "in-use"
    INACTIVE = "inactive"

    @property
    def wire(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


DEFAULT_STATE = State.INACTIVE


def parse_state(text: str) -> State:
    """Parse a wire token into a State, ignoring case.

    Raises InvalidInputError naming the offending value for anything else.
    """
    if isinstance(text, str):
        token = text.lower()
        for state in State:
            if state.value == token:
                return state
    raise InvalidInputError(f"Unknown state value: {text}", field="state")


# ─── Entities ────────────────────────────────────────────────────

@dataclass(frozen=True)
class DeviceEntity:
    """Stored device as seen by the core. id/created_at are None until persisted."""
    name: str
    brand: str
    state: State
    id: DeviceId | None = None
    created_at: datetime | None = None

    @property
    def in_use(self) -> bool:
        return self.state is State.IN_USE
