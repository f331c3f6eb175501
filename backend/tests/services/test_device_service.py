"""Device Service — policy tests over an in-memory repository fake.

Tests cover:
    - create defaults state, translates IntegrityViolation → DuplicateDeviceError
    - list dispatches to the right store query for each brand/state combination
    - full_replace / partial_update / delete IN_USE guard matrix
    - NotFound raised before any guard or write
    - errors other than IntegrityViolation propagate untouched
"""

import logging

import pytest

from devices_api.core.device_mapper import DeviceMapper
from devices_api.core.domain_types import DeviceId, State
from devices_api.core.errors import (
    DatabaseError, DuplicateDeviceError, ResourceLockedError, ResourceNotFoundError,
)
from devices_api.schemas.device import CreateDeviceRequest, PartialUpdateDeviceRequest
from devices_api.services.device_service import DeviceService
from tests.services.fake_device_repository import FakeDeviceRepository


@pytest.fixture
def repo():
    repo = FakeDeviceRepository()
    repo.seed("iPhone 15", "Apple", State.AVAILABLE)
    repo.seed("Galaxy S24", "Samsung", State.IN_USE)
    repo.seed("Pixel 8", "Google", State.INACTIVE)
    repo.calls.clear()
    return repo


@pytest.fixture
def service(repo):
    return DeviceService(repo, DeviceMapper())


def _writes(repo) -> list:
    return [c for c in repo.calls if c[0] in ("save", "delete_by_id")]


# ─── create / get ────────────────────────────────────────────────

async def test_create_defaults_state_to_inactive(service):
    res = await service.create(CreateDeviceRequest(name="Kindle", brand="Amazon"))
    assert res.state == "inactive"
    assert res.id == 4
    assert res.created_at is not None


async def test_create_logs_client_text_only_as_extras(service, caplog):
    with caplog.at_level(logging.INFO, logger="devices_api.services.device_service"):
        await service.create(CreateDeviceRequest(name="Kindle {evil}", brand="Amazon"))

    record = next(r for r in caplog.records if r.getMessage() == "Creating device")
    assert record.device_name == "Kindle {evil}"
    assert record.brand == "Amazon"
    assert all("Kindle" not in r.getMessage() for r in caplog.records)


async def test_create_round_trips_through_get(service):
    created = await service.create(
        CreateDeviceRequest(name="Kindle", brand="Amazon", state="available"),
    )
    fetched = await service.get_by_id(DeviceId(created.id))
    assert fetched == created
    assert (fetched.name, fetched.brand, fetched.state) == ("Kindle", "Amazon", "available")


async def test_create_duplicate_raises_duplicate(service):
    with pytest.raises(DuplicateDeviceError) as exc_info:
        await service.create(CreateDeviceRequest(name="iPhone 15", brand="Apple"))
    assert exc_info.value.http_status == 409


async def test_get_missing_raises_not_found(service):
    with pytest.raises(ResourceNotFoundError) as exc_info:
        await service.get_by_id(DeviceId(999))
    assert exc_info.value.message == "Device not found with id: 999"


# ─── list dispatch ───────────────────────────────────────────────

@pytest.mark.parametrize(
    "brand, state, expected_call, expected_ids",
    [
        ("Apple", State.AVAILABLE, ("find_by_brand_and_state", "Apple", "available"), [1]),
        ("Apple", None, ("find_by_brand", "Apple"), [1]),
        (None, State.IN_USE, ("find_by_state", "in-use"), [2]),
        (None, None, ("find_all",), [1, 2, 3]),
    ],
)
async def test_list_dispatches_to_matching_query(
    service, repo, brand, state, expected_call, expected_ids,
):
    result = await service.list_devices(brand=brand, state=state)
    assert repo.calls == [expected_call]
    assert [d.id for d in result] == expected_ids


async def test_list_with_no_matches_is_empty(service):
    assert await service.list_devices(brand="Nokia") == []


# ─── full replace ────────────────────────────────────────────────

@pytest.mark.parametrize("device_id", [1, 3])
async def test_full_replace_allowed_when_not_in_use(service, repo, device_id):
    original_created = repo.rows[device_id].created_at
    res = await service.full_replace(
        DeviceId(device_id), CreateDeviceRequest(name="Renamed", brand="Brand"),
    )
    assert res.name == "Renamed"
    assert res.state == "inactive"
    assert repo.rows[device_id].created_at == original_created


async def test_full_replace_in_use_is_locked_without_write(service, repo):
    with pytest.raises(ResourceLockedError):
        await service.full_replace(
            DeviceId(2), CreateDeviceRequest(name="x", brand="y", state="available"),
        )
    assert _writes(repo) == []


async def test_full_replace_missing_raises_not_found(service, repo):
    with pytest.raises(ResourceNotFoundError):
        await service.full_replace(
            DeviceId(999), CreateDeviceRequest(name="x", brand="y"),
        )
    assert _writes(repo) == []


async def test_full_replace_duplicate_raises_duplicate(service):
    with pytest.raises(DuplicateDeviceError):
        await service.full_replace(
            DeviceId(3), CreateDeviceRequest(name="iPhone 15", brand="Apple"),
        )


# ─── partial update ──────────────────────────────────────────────

@pytest.mark.parametrize(
    "body",
    [{"name": "x"}, {"brand": "y"}, {"name": "x", "brand": "y", "state": "available"}],
)
async def test_partial_update_name_or_brand_on_in_use_is_locked(service, repo, body):
    with pytest.raises(ResourceLockedError):
        await service.partial_update(DeviceId(2), PartialUpdateDeviceRequest(**body))
    assert _writes(repo) == []


@pytest.mark.parametrize("body", [{}, {"state": "available"}, {"state": "in-use"}])
async def test_partial_update_state_only_on_in_use_is_allowed(service, body):
    res = await service.partial_update(DeviceId(2), PartialUpdateDeviceRequest(**body))
    assert res.name == "Galaxy S24"
    assert res.state == body.get("state", "in-use")


@pytest.mark.parametrize("device_id", [1, 3])
@pytest.mark.parametrize(
    "body", [{"name": "x"}, {"brand": "y"}, {"state": "in-use"}],
)
async def test_partial_update_any_field_allowed_when_not_in_use(service, device_id, body):
    res = await service.partial_update(
        DeviceId(device_id), PartialUpdateDeviceRequest(**body),
    )
    for key, value in body.items():
        assert getattr(res, key) == value


async def test_partial_update_keeps_created_at(service, repo):
    before = await service.get_by_id(DeviceId(1))
    after = await service.partial_update(
        DeviceId(1), PartialUpdateDeviceRequest(name="iPhone 15 Pro"),
    )
    assert after.created_at == before.created_at


async def test_partial_update_duplicate_raises_duplicate(service):
    with pytest.raises(DuplicateDeviceError):
        await service.partial_update(
            DeviceId(3), PartialUpdateDeviceRequest(name="iPhone 15", brand="Apple"),
        )


async def test_partial_update_missing_raises_not_found(service):
    with pytest.raises(ResourceNotFoundError):
        await service.partial_update(DeviceId(999), PartialUpdateDeviceRequest())


# ─── delete ──────────────────────────────────────────────────────

@pytest.mark.parametrize("device_id", [1, 3])
async def test_delete_allowed_when_not_in_use(service, repo, device_id):
    await service.delete(DeviceId(device_id))
    assert device_id not in repo.rows


async def test_delete_in_use_is_locked(service, repo):
    with pytest.raises(ResourceLockedError) as exc_info:
        await service.delete(DeviceId(2))
    assert exc_info.value.http_status == 423
    assert 2 in repo.rows


async def test_delete_missing_raises_not_found(service, repo):
    with pytest.raises(ResourceNotFoundError):
        await service.delete(DeviceId(999))
    assert _writes(repo) == []


# ─── propagation ─────────────────────────────────────────────────

async def test_unexpected_store_errors_propagate():
    class _BrokenRepository(FakeDeviceRepository):
        async def save(self, device):
            raise DatabaseError("Connection or operational error", "execute")

    broken = _BrokenRepository()
    service = DeviceService(broken, DeviceMapper())
    with pytest.raises(DatabaseError):
        await service.create(CreateDeviceRequest(name="a", brand="b"))
