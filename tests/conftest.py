"""
Shared test fixtures.

Store-level and service tests run twice: once against the in-memory store
and once against the SQL store on an in-memory SQLite database (via
aiosqlite), so both backends are held to the same behaviour without
Docker / PostgreSQL / Redis.
"""

from datetime import timedelta
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from src.domain.clock import utcnow
from src.domain.exceptions import TransportError
from src.infrastructure import models  # noqa: F401  (registers tables)
from src.infrastructure.database import Base, build_session_factory
from src.infrastructure.memory_store import MemoryStore
from src.infrastructure.sql_store import SqlStoreFactory
from src.services.bookings import BookingService
from src.services.notifications import NotificationService
from src.services.rides import RideService
from src.services.users import UserService
from src.workers.push_dispatcher import PushDispatcher


TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


class RecordingPushChannel:
    """Stands in for ``RedisPushChannel``; keeps published records in a list."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.published: list[tuple[int, dict]] = []

    async def publish(self, user_id, record):
        if self.fail:
            raise TransportError("push channel unavailable")
        self.published.append((user_id, record))
        return f"push-{len(self.published)}"

    async def watch(self, user_id):
        yield [record for uid, record in self.published if uid == user_id]

    async def close(self):
        pass


def ride_fields(hours: float = 24, **overrides) -> dict:
    expires_at = utcnow() + timedelta(hours=hours)
    fields = {
        "origin": "X",
        "destination": "Y",
        "date": expires_at.date().isoformat(),
        "time": "09:30",
        "seats": 2,
        "price": 10,
        "expires_at": expires_at,
    }
    fields.update(overrides)
    return fields


# ── Stores ────────────────────────────────────────────────────────────


@pytest_asyncio.fixture(params=["memory", "sql"])
async def store(request) -> AsyncGenerator:
    if request.param == "memory":
        yield MemoryStore()
        return

    engine = create_async_engine(TEST_DB_URL, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with SqlStoreFactory(build_session_factory(engine)).session() as sql_store:
        yield sql_store

    await engine.dispose()


# ── Services ──────────────────────────────────────────────────────────


@pytest.fixture
def push_channel() -> RecordingPushChannel:
    return RecordingPushChannel()


@pytest_asyncio.fixture
async def dispatcher(push_channel) -> AsyncGenerator[PushDispatcher, None]:
    dispatcher = PushDispatcher(push_channel)
    yield dispatcher
    await dispatcher.drain()


@pytest.fixture
def users(store) -> UserService:
    return UserService(store)


@pytest.fixture
def rides(store) -> RideService:
    return RideService(store)


@pytest.fixture
def notifications(store, dispatcher) -> NotificationService:
    return NotificationService(store, dispatcher)


@pytest.fixture
def bookings(store, rides, notifications) -> BookingService:
    return BookingService(store, rides, notifications)


@pytest_asyncio.fixture
async def driver(users):
    return await users.register("driver_a", "secret", name="Asha Driver")


@pytest_asyncio.fixture
async def rider(users):
    return await users.register("rider_b", "secret", name="Bilal Rider")
