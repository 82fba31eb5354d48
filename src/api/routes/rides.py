"""
Ride endpoints
==============

POST /api/v1/rides           -- post a ride offer (driver = current user)
GET  /api/v1/rides           -- list rides that are available and not expired
GET  /api/v1/rides/{ride_id} -- fetch one ride
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from src.api.auth import get_current_user
from src.api.dependencies import get_ride_service
from src.api.schemas import ErrorResponse, RideCreateRequest, RideResponse
from src.domain.entities import User
from src.services.rides import RideService

router = APIRouter(prefix="/rides", tags=["rides"])


@router.post(
    "",
    status_code=201,
    response_model=RideResponse,
    summary="Post a ride offer",
)
async def create_ride(
    body: RideCreateRequest,
    user: User = Depends(get_current_user),
    rides: RideService = Depends(get_ride_service),
):
    return await rides.create_ride(user.id, **body.model_dump())


@router.get(
    "",
    response_model=list[RideResponse],
    summary="List bookable rides",
    description="Rides that are still available and expire after the request time.",
)
async def list_rides(
    user: User = Depends(get_current_user),
    rides: RideService = Depends(get_ride_service),
):
    return await rides.list_available_rides()


@router.get(
    "/{ride_id}",
    response_model=RideResponse,
    summary="Get a ride",
    responses={404: {"model": ErrorResponse, "description": "Ride not found"}},
)
async def get_ride(
    ride_id: int,
    user: User = Depends(get_current_user),
    rides: RideService = Depends(get_ride_service),
):
    return await rides.get_ride(ride_id)
