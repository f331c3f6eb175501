"""Lock Enforcement — IN_USE guards for every structural write.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Guards look at the EXISTING state only, never at the requested state
    - Raise ResourceLockedError on violation, return None otherwise
    - A partial update touching only `state` is always allowed (releases the lock)
"""

from devices_api.core.domain_types import DeviceEntity
from devices_api.core.errors import ErrorContext, ResourceLockedError


def check_replace_allowed(existing: DeviceEntity) -> None:
    """Full replace is blocked while the device is IN_USE."""
    if existing.in_use:
        raise ResourceLockedError(
            "Cannot update a device that is currently IN_USE",
            ErrorContext(device_id=existing.id),
        )


def check_partial_update_allowed(
    existing: DeviceEntity, changes_name: bool, changes_brand: bool,
) -> None:
    """Name/brand changes are blocked while IN_USE; state-only changes pass."""
    if existing.in_use and (changes_name or changes_brand):
        raise ResourceLockedError(
            "Cannot update brand or name of a device that is currently IN_USE",
            ErrorContext(device_id=existing.id),
        )


def check_delete_allowed(existing: DeviceEntity) -> None:
    """Delete is blocked while the device is IN_USE."""
    if existing.in_use:
        raise ResourceLockedError(
            "Cannot delete a device that is currently IN_USE",
            ErrorContext(device_id=existing.id),
        )
