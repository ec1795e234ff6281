"""Pytest configuration and fixtures."""

import asyncio
import sys
from datetime import UTC, datetime, timedelta

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from api.deps import get_storage
from main import app
from repos.storage import build_memory_storage, build_sql_storage

# Fix Windows asyncio event loop
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

# In-memory SQLite shared by every session of one test
TEST_DATABASE_URL = "sqlite+aiosqlite://"


class FakeClock:
    """Controllable clock handed to repositories instead of utc_now."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock():
    """Clock starting at a fixed instant."""
    return FakeClock(datetime(2026, 3, 15, 12, 0, tzinfo=UTC))


async def _make_sql_storage(**kwargs):
    storage = build_sql_storage(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        **kwargs,
    )
    await storage.init()
    return storage


@pytest.fixture
def memory_storage():
    """Empty in-memory storage using the real clock."""
    return build_memory_storage()


@pytest_asyncio.fixture
async def sql_storage():
    """Empty SQL storage on in-memory SQLite using the real clock."""
    storage = await _make_sql_storage()
    yield storage
    await storage.close()


@pytest_asyncio.fixture(params=["memory", "sql"])
async def storage(request, clock):
    """Storage of each backend, driven by the fake clock.

    Tests using this fixture run once per backend, so both implementations
    are held to the same repository contract.
    """
    if request.param == "memory":
        yield build_memory_storage(clock=clock)
        return

    storage = await _make_sql_storage(clock=clock)
    yield storage
    await storage.close()


@pytest.fixture
def override_get_storage(memory_storage):
    """Override get_storage dependency for testing."""
    app.dependency_overrides[get_storage] = lambda: memory_storage
    yield memory_storage
    app.dependency_overrides.clear()


@pytest.fixture
def client(override_get_storage):
    """Create test client."""
    return TestClient(app)

