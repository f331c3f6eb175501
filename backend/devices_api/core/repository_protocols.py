"""Boundary Protocols — the device store contract between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - save() is the only write that can raise IntegrityViolation, atomically with the write
    - save() assigns id and created_at on insert; on replace it preserves created_at
    - Filters are exact equality (no case folding, no prefix); state filters use the wire spelling

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance (ADR: ExMA anti-pattern)
    - Async in Protocol: implementations do IO; the pure guard/mapping logic stays sync
"""

from typing import Protocol

from devices_api.core.domain_types import DeviceEntity, DeviceId


class DeviceRepository(Protocol):
    """Contract for device persistence — implemented by shell."""
    async def save(self, device: DeviceEntity) -> DeviceEntity: ...
    async def find_by_id(self, device_id: DeviceId) -> DeviceEntity | None: ...
    async def find_all(self) -> list[DeviceEntity]: ...
    async def find_by_brand(self, brand: str) -> list[DeviceEntity]: ...
    async def find_by_state(self, state: str) -> list[DeviceEntity]: ...
    async def find_by_brand_and_state(
        self, brand: str, state: str,
    ) -> list[DeviceEntity]: ...
    async def delete_by_id(self, device_id: DeviceId) -> None: ...
