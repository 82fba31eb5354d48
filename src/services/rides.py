"""Ride lifecycle: posting offers, listing bookable rides, closing them."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from src.domain.clock import ensure_utc, utcnow
from src.domain.entities import Ride
from src.domain.exceptions import NotFoundError

logger = logging.getLogger(__name__)


class RideService:
    def __init__(self, store):
        self.store = store

    async def create_ride(self, driver_id: int, **fields) -> Ride:
        """Post a ride for *driver_id*.  New rides are always available."""
        fields.pop("available", None)
        if fields.get("expires_at") is not None:
            fields["expires_at"] = ensure_utc(fields["expires_at"])
        ride = await self.store.rides.create(
            driver_id=driver_id, available=True, **fields
        )
        logger.info(
            "Ride %d posted by driver %d (%s -> %s)",
            ride.id,
            driver_id,
            ride.origin,
            ride.destination,
        )
        return ride

    async def get_ride(self, ride_id: int) -> Ride:
        ride = await self.store.rides.get_by_id(ride_id)
        if ride is None:
            raise NotFoundError(f"Ride {ride_id} not found")
        return ride

    async def list_available_rides(self, now: Optional[datetime] = None) -> list[Ride]:
        """Available rides that expire after *now*.  Nothing is cleaned up."""
        now = ensure_utc(now) if now is not None else utcnow()
        return await self.store.rides.list_available(now)

    async def mark_unavailable(self, ride_id: int) -> None:
        """Close a ride to further bookings.  Missing rides are ignored."""
        ride = await self.store.rides.get_by_id(ride_id)
        if ride is None or not ride.available:
            return
        await self.store.rides.update(ride_id, available=False)
        logger.info("Ride %d is no longer available", ride_id)
