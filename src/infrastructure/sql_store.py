"""
Repository Pattern -- relational store backend.

Each repository receives an ``AsyncSession`` (unit-of-work) and exposes the
same methods as its in-memory counterpart.  Rows are converted to domain
dataclasses on the way out, so nothing above this module ever touches an
ORM instance.
"""

from __future__ import annotations

import dataclasses
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator, Callable, Generic, Optional, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from .models import (
    BookingModel,
    FavoriteLocationModel,
    NotificationModel,
    RideModel,
    UserModel,
)
from src.domain.clock import ensure_utc
from src.domain.entities import (
    Booking,
    FavoriteLocation,
    Notification,
    Ride,
    User,
)
from src.domain.exceptions import NotFoundError

T = TypeVar("T")


class SqlRepository(Generic[T]):
    entity_type: type
    model: type

    def __init__(self, session: AsyncSession):
        self.session = session

    def _to_entity(self, row) -> T:
        values = {}
        for f in dataclasses.fields(self.entity_type):
            value = getattr(row, f.name)
            # SQLite hands back naive datetimes; everything is stored as UTC.
            if isinstance(value, datetime):
                value = ensure_utc(value)
            values[f.name] = value
        return self.entity_type(**values)

    async def _all(self, query) -> list[T]:
        result = await self.session.execute(query)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def create(self, **fields) -> T:
        # Build the entity first so every column gets its dataclass default.
        draft = self.entity_type(**fields)
        row = self.model(
            **{
                f.name: getattr(draft, f.name)
                for f in dataclasses.fields(draft)
                if f.name != "id"
            }
        )
        self.session.add(row)
        await self.session.flush()
        return self._to_entity(row)

    async def get_by_id(self, record_id: int) -> Optional[T]:
        row = await self.session.get(self.model, record_id)
        return self._to_entity(row) if row is not None else None

    async def update(self, record_id: int, **patch) -> T:
        row = await self.session.get(self.model, record_id)
        if row is None:
            raise NotFoundError(
                f"{self.entity_type.__name__} {record_id} not found"
            )
        for key, value in patch.items():
            setattr(row, key, value)
        await self.session.flush()
        return self._to_entity(row)


class SqlUserRepository(SqlRepository[User]):
    entity_type = User
    model = UserModel

    async def get_by_username(self, username: str) -> Optional[User]:
        result = await self.session.execute(
            select(UserModel).where(UserModel.username == username)
        )
        row = result.scalar_one_or_none()
        return self._to_entity(row) if row is not None else None


class SqlRideRepository(SqlRepository[Ride]):
    entity_type = Ride
    model = RideModel

    async def list_available(self, now: datetime) -> list[Ride]:
        return await self._all(
            select(RideModel)
            .where(RideModel.available.is_(True), RideModel.expires_at > now)
            .order_by(RideModel.id)
        )

    async def list_by_driver(self, driver_id: int) -> list[Ride]:
        return await self._all(
            select(RideModel)
            .where(RideModel.driver_id == driver_id)
            .order_by(RideModel.id)
        )


class SqlBookingRepository(SqlRepository[Booking]):
    entity_type = Booking
    model = BookingModel

    async def list_by_user(self, user_id: int) -> list[Booking]:
        return await self._all(
            select(BookingModel)
            .where(BookingModel.user_id == user_id)
            .order_by(BookingModel.id)
        )


class SqlLocationRepository(SqlRepository[FavoriteLocation]):
    entity_type = FavoriteLocation
    model = FavoriteLocationModel

    async def list_by_user(self, user_id: int) -> list[FavoriteLocation]:
        return await self._all(
            select(FavoriteLocationModel)
            .where(FavoriteLocationModel.user_id == user_id)
            .order_by(FavoriteLocationModel.id)
        )


class SqlNotificationRepository(SqlRepository[Notification]):
    entity_type = Notification
    model = NotificationModel

    async def list_by_user(self, user_id: int) -> list[Notification]:
        return await self._all(
            select(NotificationModel)
            .where(NotificationModel.user_id == user_id)
            .order_by(
                NotificationModel.created_at.desc(), NotificationModel.id.desc()
            )
        )


class SqlStore:
    """One repository per entity type, all sharing a single session.

    Side effects that must not outlive a rollback (push publishes) are
    registered with ``after_commit`` and run only once ``commit`` succeeds.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.users = SqlUserRepository(session)
        self.rides = SqlRideRepository(session)
        self.bookings = SqlBookingRepository(session)
        self.locations = SqlLocationRepository(session)
        self.notifications = SqlNotificationRepository(session)
        self._after_commit: list[Callable[[], None]] = []

    def after_commit(self, callback: Callable[[], None]) -> None:
        self._after_commit.append(callback)

    async def commit(self) -> None:
        await self.session.commit()
        callbacks, self._after_commit = self._after_commit, []
        for callback in callbacks:
            callback()

    async def rollback(self) -> None:
        self._after_commit.clear()
        await self.session.rollback()


class SqlStoreFactory:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    @asynccontextmanager
    async def session(self) -> AsyncIterator[SqlStore]:
        """Yield a store bound to a fresh session; commit on success, rollback on error."""
        async with self._session_factory() as session:
            store = SqlStore(session)
            try:
                yield store
                await store.commit()
            except Exception:
                await store.rollback()
                raise
