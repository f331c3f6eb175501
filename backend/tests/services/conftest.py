"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test session factory
    - db_manager patched so the readiness probe sees the test engine
    - seed_devices inserts id=1 AVAILABLE, id=2 IN_USE, id=3 INACTIVE

Design Decisions:
    - SQLite in-memory: fast, no external dependency; the unique constraint and
      autoincrement behave like PostgreSQL for everything exercised here
"""

from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

import devices_api.infrastructure.database as db_module
from devices_api.db.base import Base
from devices_api.infrastructure.database import DatabaseSessionManager, get_db
from devices_api.main import app
from devices_api.models.device import Device

SEED_DEVICES = [
    {"id": 1, "name": "iPhone 15", "brand": "Apple", "state": "available"},
    {"id": 2, "name": "Galaxy S24", "brand": "Samsung", "state": "in-use"},
    {"id": 3, "name": "Pixel 8", "brand": "Google", "state": "inactive"},
]
SEED_CREATED_AT = datetime(2025, 1, 15, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def seed_created_at():
    """Timestamp stamped on every seeded row."""
    return SEED_CREATED_AT


@pytest.fixture
async def seed_devices(test_session_factory):
    """Insert the three reference devices directly into the test DB."""
    async with test_session_factory() as session:
        session.add_all([
            Device(**row, created_at=SEED_CREATED_AT) for row in SEED_DEVICES
        ])
        await session.commit()
    return SEED_DEVICES
