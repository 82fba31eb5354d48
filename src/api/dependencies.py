"""
FastAPI dependency injection helpers.

The store factory and push dispatcher live on ``app.state`` (set up in the
lifespan); services are built per request around the request's store.
FastAPI caches ``get_store`` within a request, so every service in one
request shares the same store session.
"""

from typing import AsyncIterator, Optional

from fastapi import Depends, Request

from src.services.bookings import BookingService
from src.services.notifications import NotificationService
from src.services.rides import RideService
from src.services.users import UserService
from src.workers.push_dispatcher import PushDispatcher


async def get_store(request: Request) -> AsyncIterator:
    """Yield a store; the SQL backend commits on success, rolls back on error."""
    async with request.app.state.stores.session() as store:
        yield store


def get_dispatcher(request: Request) -> Optional[PushDispatcher]:
    return request.app.state.dispatcher


def get_user_service(store=Depends(get_store)) -> UserService:
    return UserService(store)


def get_ride_service(store=Depends(get_store)) -> RideService:
    return RideService(store)


def get_notification_service(
    store=Depends(get_store),
    dispatcher: Optional[PushDispatcher] = Depends(get_dispatcher),
) -> NotificationService:
    return NotificationService(store, dispatcher)


def get_booking_service(
    store=Depends(get_store),
    rides: RideService = Depends(get_ride_service),
    notifications: NotificationService = Depends(get_notification_service),
) -> BookingService:
    return BookingService(store, rides, notifications)
