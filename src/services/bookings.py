"""
Booking lifecycle
=================

PENDING --accept--> ACCEPTED   (ride becomes unavailable)
        --reject--> REJECTED

A driver may answer the same booking more than once; every answer is
recorded and notifies the rider again.  Accepting is the only path that
closes a ride.

The status write and the ride cascade are two separate store writes.  The
status goes first so a failed cascade still leaves the answer recorded.
"""

from __future__ import annotations

import logging
from typing import Optional

from src.domain.clock import utcnow
from src.domain.entities import Booking, BookingDetail, Ride
from src.domain.enums import BookingStatus, NotificationKind
from src.domain.exceptions import NotFoundError

from .notifications import NotificationService
from .rides import RideService

logger = logging.getLogger(__name__)

REQUEST_TITLE = "New Ride Request"
ACCEPTED_MESSAGE = "Great news! Your ride request has been accepted."
DECLINED_MESSAGE = "Sorry, your ride request has been declined."


class BookingService:
    def __init__(
        self,
        store,
        rides: RideService,
        notifications: NotificationService,
    ):
        self.store = store
        self.rides = rides
        self.notifications = notifications

    async def create_booking(
        self,
        rider_id: int,
        ride_id: int,
        *,
        is_parcel: bool = False,
        rider_name: Optional[str] = None,
    ) -> Booking:
        ride = await self.store.rides.get_by_id(ride_id)
        if ride is None:
            raise NotFoundError(f"Ride {ride_id} not found")

        booking = await self.store.bookings.create(
            ride_id=ride_id,
            user_id=rider_id,
            status=BookingStatus.PENDING,
            is_parcel=is_parcel,
            created_at=utcnow(),
        )
        logger.info("Booking %d created by user %d on ride %d", booking.id, rider_id, ride_id)

        who = rider_name or f"User {rider_id}"
        await self.notifications.notify(
            ride.driver_id,
            REQUEST_TITLE,
            f"{who} wants to book your ride from {ride.origin} to {ride.destination}",
            NotificationKind.RIDE_REQUEST,
            related_ride_id=ride.id,
            related_booking_id=booking.id,
        )
        return booking

    async def update_status(self, booking_id: int, new_status: BookingStatus) -> Booking:
        booking = await self.store.bookings.get_by_id(booking_id)
        if booking is None:
            raise NotFoundError(f"Booking {booking_id} not found")

        status = booking.transition_to(BookingStatus(new_status))
        booking = await self.store.bookings.update(booking_id, status=status)
        logger.info("Booking %d -> %s", booking_id, status.value)

        accepted = status is BookingStatus.ACCEPTED
        if accepted:
            await self.rides.mark_unavailable(booking.ride_id)

        await self.notifications.notify(
            booking.user_id,
            f"Ride Request {status.value.capitalize()}",
            ACCEPTED_MESSAGE if accepted else DECLINED_MESSAGE,
            NotificationKind.RIDE_RESPONSE,
            related_ride_id=booking.ride_id,
            related_booking_id=booking.id,
        )
        return booking

    async def list_for_user(self, user_id: int) -> list[BookingDetail]:
        bookings = await self.store.bookings.list_by_user(user_id)
        details = []
        for booking in bookings:
            # Rides are never deleted, so the join always resolves.
            ride = await self.store.rides.get_by_id(booking.ride_id)
            details.append(BookingDetail(booking=booking, ride=ride))
        return details

    async def list_offered(self, user_id: int) -> list[Ride]:
        return await self.store.rides.list_by_driver(user_id)
