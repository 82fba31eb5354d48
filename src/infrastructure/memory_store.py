"""
In-memory entity store (default backend).

One ``MemoryCollection`` per entity type holds records in a dict keyed by
id.  Ids come from a per-collection counter that starts at 1 and is bumped
on every ``create`` call, so they are never reused within a process.

There is no locking: the store relies on the event loop running one
request's read-modify-write to completion before the next.  Concurrent
updates of the same record are last-write-wins.
"""

from __future__ import annotations

import dataclasses
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator, Callable, Generic, Optional, TypeVar

from src.domain.entities import (
    Booking,
    FavoriteLocation,
    Notification,
    Ride,
    User,
)
from src.domain.exceptions import NotFoundError

T = TypeVar("T")


class MemoryCollection(Generic[T]):
    def __init__(self, entity_type: type[T]):
        self.entity_type = entity_type
        self._records: dict[int, T] = {}
        self._next_id = 1

    async def create(self, **fields) -> T:
        record_id = self._next_id
        self._next_id += 1
        record = self.entity_type(id=record_id, **fields)
        self._records[record_id] = record
        return record

    async def get_by_id(self, record_id: int) -> Optional[T]:
        return self._records.get(record_id)

    async def list(self, predicate: Optional[Callable[[T], bool]] = None) -> list[T]:
        records = list(self._records.values())
        if predicate is None:
            return records
        return [r for r in records if predicate(r)]

    async def update(self, record_id: int, **patch) -> T:
        current = self._records.get(record_id)
        if current is None:
            raise NotFoundError(
                f"{self.entity_type.__name__} {record_id} not found"
            )
        updated = dataclasses.replace(current, **patch)
        self._records[record_id] = updated
        return updated


class MemoryUserRepository(MemoryCollection[User]):
    def __init__(self):
        super().__init__(User)

    async def get_by_username(self, username: str) -> Optional[User]:
        matches = await self.list(lambda u: u.username == username)
        return matches[0] if matches else None


class MemoryRideRepository(MemoryCollection[Ride]):
    def __init__(self):
        super().__init__(Ride)

    async def list_available(self, now: datetime) -> list[Ride]:
        return await self.list(lambda r: r.is_bookable(now))

    async def list_by_driver(self, driver_id: int) -> list[Ride]:
        return await self.list(lambda r: r.driver_id == driver_id)


class MemoryBookingRepository(MemoryCollection[Booking]):
    def __init__(self):
        super().__init__(Booking)

    async def list_by_user(self, user_id: int) -> list[Booking]:
        return await self.list(lambda b: b.user_id == user_id)


class MemoryLocationRepository(MemoryCollection[FavoriteLocation]):
    def __init__(self):
        super().__init__(FavoriteLocation)

    async def list_by_user(self, user_id: int) -> list[FavoriteLocation]:
        return await self.list(lambda loc: loc.user_id == user_id)


class MemoryNotificationRepository(MemoryCollection[Notification]):
    def __init__(self):
        super().__init__(Notification)

    async def list_by_user(self, user_id: int) -> list[Notification]:
        """Newest first; equal timestamps fall back to the higher id."""
        records = await self.list(lambda n: n.user_id == user_id)
        return sorted(records, key=lambda n: (n.created_at, n.id), reverse=True)


class MemoryStore:
    """Bundles one repository per entity type for the lifetime of the process.

    Writes are visible immediately, so ``after_commit`` callbacks run at once
    and ``commit`` has nothing to do.
    """

    def __init__(self):
        self.users = MemoryUserRepository()
        self.rides = MemoryRideRepository()
        self.bookings = MemoryBookingRepository()
        self.locations = MemoryLocationRepository()
        self.notifications = MemoryNotificationRepository()

    def after_commit(self, callback: Callable[[], None]) -> None:
        callback()

    async def commit(self) -> None:
        pass

    @asynccontextmanager
    async def session(self) -> AsyncIterator["MemoryStore"]:
        yield self
