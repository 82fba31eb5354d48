"""Domain enumerations and state-transition rules."""

import enum


class BookingStatus(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


# State machine: maps current status -> set of valid next statuses.
# A driver may answer a booking again; nothing ever returns to PENDING.
BOOKING_TRANSITIONS: dict[BookingStatus, set[BookingStatus]] = {
    BookingStatus.PENDING: {BookingStatus.ACCEPTED, BookingStatus.REJECTED},
    BookingStatus.ACCEPTED: {BookingStatus.ACCEPTED, BookingStatus.REJECTED},
    BookingStatus.REJECTED: {BookingStatus.ACCEPTED, BookingStatus.REJECTED},
}


class NotificationKind(str, enum.Enum):
    RIDE_REQUEST = "ride_request"
    RIDE_RESPONSE = "ride_response"
    SYSTEM = "system"


class Theme(str, enum.Enum):
    LIGHT = "light"
    DARK = "dark"


class LocationType(str, enum.Enum):
    HOME = "home"
    WORK = "work"
    COLLEGE = "college"
