"""
Booking endpoints
=================

POST  /api/v1/bookings                    -- request a seat on a ride
PATCH /api/v1/bookings/{booking_id}/status -- accept or reject a booking
GET   /api/v1/bookings/history             -- own bookings + own ride offers
"""

from __future__ import annotations

import dataclasses

from fastapi import APIRouter, Depends

from src.api.auth import get_current_user
from src.api.dependencies import get_booking_service
from src.api.schemas import (
    BookingCreateRequest,
    BookingHistoryResponse,
    BookingResponse,
    BookingStatusUpdateRequest,
    BookingWithRideResponse,
    ErrorResponse,
    RideResponse,
)
from src.domain.entities import User
from src.services.bookings import BookingService

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post(
    "",
    status_code=201,
    response_model=BookingResponse,
    summary="Book a ride",
    description="Creates a pending booking and notifies the ride's driver.",
    responses={404: {"model": ErrorResponse, "description": "Ride not found"}},
)
async def create_booking(
    body: BookingCreateRequest,
    user: User = Depends(get_current_user),
    bookings: BookingService = Depends(get_booking_service),
):
    return await bookings.create_booking(
        user.id,
        body.ride_id,
        is_parcel=body.is_parcel,
        rider_name=user.display_name,
    )


@router.patch(
    "/{booking_id}/status",
    response_model=BookingResponse,
    summary="Accept or reject a booking",
    description=(
        "Accepting closes the ride to further bookings. "
        "Either answer notifies the rider."
    ),
    responses={
        404: {"model": ErrorResponse, "description": "Booking not found"},
        409: {
            "model": ErrorResponse,
            "description": "Status cannot be set back to pending",
        },
    },
)
async def update_booking_status(
    booking_id: int,
    body: BookingStatusUpdateRequest,
    user: User = Depends(get_current_user),
    bookings: BookingService = Depends(get_booking_service),
):
    return await bookings.update_status(booking_id, body.status)


@router.get(
    "/history",
    response_model=BookingHistoryResponse,
    summary="Booking history",
)
async def booking_history(
    user: User = Depends(get_current_user),
    bookings: BookingService = Depends(get_booking_service),
):
    details = await bookings.list_for_user(user.id)
    offered = await bookings.list_offered(user.id)
    return BookingHistoryResponse(
        bookings=[
            BookingWithRideResponse.model_validate(
                {
                    **dataclasses.asdict(d.booking),
                    "ride": dataclasses.asdict(d.ride),
                }
            )
            for d in details
        ],
        offered_rides=[RideResponse.model_validate(r) for r in offered],
    )
