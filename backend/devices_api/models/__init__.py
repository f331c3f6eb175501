"""ORM Models — SQLAlchemy declarative models.

Design Decisions:
    - All models imported here so Base.metadata is complete for Alembic and test fixtures
"""

from devices_api.models.device import Device  # noqa: F401
