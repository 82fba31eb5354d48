"""Pydantic request / response schemas for the REST API."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from src.domain.enums import (
    BookingStatus,
    LocationType,
    NotificationKind,
    Theme,
)


# ── Requests ──────────────────────────────────────────────────────────


class UserCreateRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=120)
    password: str = Field(
        ...,
        min_length=1,
        description="Opaque credential secret issued by the auth provider.",
    )
    name: Optional[str] = Field(None, max_length=120)
    phone: Optional[str] = Field(None, max_length=32)
    theme: Theme = Theme.DARK
    profile_image: Optional[str] = None


class ProfileUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, max_length=120)
    phone: Optional[str] = Field(None, max_length=32)
    profile_image: Optional[str] = None
    theme: Optional[Theme] = None


class ThemeUpdateRequest(BaseModel):
    theme: Theme


class FavoriteLocationCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    address: str = Field(..., min_length=1)
    type: LocationType


class RideCreateRequest(BaseModel):
    origin: str = Field(..., min_length=1)
    destination: str = Field(..., min_length=1)
    date: str = Field(..., min_length=1)
    time: str = Field(..., min_length=1)
    seats: int = Field(..., ge=1, le=8)
    price: int = Field(..., ge=0)
    expires_at: datetime
    accepts_parcel: bool = False
    car_model: Optional[str] = Field(None, max_length=120)
    car_number: Optional[str] = Field(None, max_length=32)
    comments: Optional[str] = None


class BookingCreateRequest(BaseModel):
    ride_id: int
    is_parcel: bool = False


class BookingStatusUpdateRequest(BaseModel):
    status: BookingStatus


# ── Responses ─────────────────────────────────────────────────────────


class UserResponse(BaseModel):
    id: int
    username: str
    name: Optional[str] = None
    phone: Optional[str] = None
    theme: Theme
    profile_image: Optional[str] = None

    model_config = {"from_attributes": True}


class FavoriteLocationResponse(BaseModel):
    id: int
    user_id: int
    name: str
    address: str
    type: LocationType

    model_config = {"from_attributes": True}


class RideResponse(BaseModel):
    id: int
    driver_id: int
    origin: str
    destination: str
    date: str
    time: str
    seats: int
    price: int
    available: bool
    expires_at: datetime
    accepts_parcel: bool = False
    car_model: Optional[str] = None
    car_number: Optional[str] = None
    comments: Optional[str] = None

    model_config = {"from_attributes": True}


class BookingResponse(BaseModel):
    id: int
    ride_id: int
    user_id: int
    status: BookingStatus
    is_parcel: bool = False
    created_at: datetime

    model_config = {"from_attributes": True}


class BookingWithRideResponse(BookingResponse):
    ride: RideResponse


class BookingHistoryResponse(BaseModel):
    bookings: list[BookingWithRideResponse] = []
    offered_rides: list[RideResponse] = []


class NotificationResponse(BaseModel):
    id: int
    user_id: int
    title: str
    message: str
    kind: NotificationKind
    read: bool
    created_at: datetime
    related_ride_id: Optional[int] = None
    related_booking_id: Optional[int] = None

    model_config = {"from_attributes": True}


class HealthResponse(BaseModel):
    status: str = "ok"
    store_backend: str
    push_enabled: bool


class ErrorResponse(BaseModel):
    """Body of every domain error (see ``RideShareError.to_dict``)."""

    detail: str
    error: str
    details: dict[str, Any] = {}
