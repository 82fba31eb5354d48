"""
Domain entities.

Plain dataclasses shared by both store backends.  Records are replaced
wholesale on update (see ``MemoryCollection.update``), so an instance held
by a caller is a snapshot, not a live view.

Patterns used
-------------
- **State Pattern** on ``Booking``: ``transition_to`` consults
  ``BOOKING_TRANSITIONS`` (PENDING -> ACCEPTED | REJECTED).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .enums import (
    BOOKING_TRANSITIONS,
    BookingStatus,
    LocationType,
    NotificationKind,
    Theme,
)
from .exceptions import InvalidStatusTransition


@dataclass
class User:
    id: Optional[int] = None
    username: str = ""
    password: str = ""  # opaque, issued by the auth collaborator
    name: Optional[str] = None
    phone: Optional[str] = None
    theme: Theme = Theme.DARK
    profile_image: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.name or self.username


@dataclass
class Ride:
    id: Optional[int] = None
    driver_id: int = 0
    origin: str = ""
    destination: str = ""
    date: str = ""
    time: str = ""
    seats: int = 1
    price: int = 0
    available: bool = True
    expires_at: Optional[datetime] = None
    accepts_parcel: bool = False
    car_model: Optional[str] = None
    car_number: Optional[str] = None
    comments: Optional[str] = None

    def is_bookable(self, now: datetime) -> bool:
        return (
            self.available
            and self.expires_at is not None
            and self.expires_at > now
        )


@dataclass
class Booking:
    id: Optional[int] = None
    ride_id: int = 0
    user_id: int = 0
    status: BookingStatus = BookingStatus.PENDING
    is_parcel: bool = False
    created_at: Optional[datetime] = None

    def transition_to(self, new_status: BookingStatus) -> BookingStatus:
        """Return *new_status* if the transition is legal, else raise."""
        allowed = BOOKING_TRANSITIONS.get(self.status, set())
        if new_status not in allowed:
            raise InvalidStatusTransition(
                f"Cannot transition booking from {self.status.value} "
                f"to {new_status.value}"
            )
        return new_status


@dataclass
class FavoriteLocation:
    id: Optional[int] = None
    user_id: int = 0
    name: str = ""
    address: str = ""
    type: LocationType = LocationType.HOME


@dataclass
class Notification:
    id: Optional[int] = None
    user_id: int = 0
    title: str = ""
    message: str = ""
    kind: NotificationKind = NotificationKind.SYSTEM
    read: bool = False
    created_at: Optional[datetime] = None
    related_ride_id: Optional[int] = None
    related_booking_id: Optional[int] = None


# ── Read models ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class BookingDetail:
    """A booking joined with the ride it references."""

    booking: Booking
    ride: Ride
