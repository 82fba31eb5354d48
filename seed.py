"""
Seed script -- populates the relational store with sample data for reviewers.

Run after migrations (or against an empty database; tables are created if
missing):
    STORE_BACKEND=sql python seed.py

Creates:
  - 6 sample users
  - 5 ride offers around Pune (one already expired)
  - 1 pending booking with the driver's "New Ride Request" notification
  - 1 favorite location per user
"""

import asyncio
from datetime import timedelta

from sqlalchemy import func, select

from src.config import settings
from src.domain.clock import utcnow
from src.domain.enums import LocationType, Theme
from src.infrastructure.database import Base, build_engine, build_session_factory
from src.infrastructure.models import UserModel
from src.infrastructure.sql_store import SqlStoreFactory
from src.services.bookings import BookingService
from src.services.notifications import NotificationService
from src.services.rides import RideService
from src.services.users import UserService


USERS = [
    {"username": "aarav", "name": "Aarav Sharma", "phone": "+91 98200 00001"},
    {"username": "priya", "name": "Priya Patel", "phone": "+91 98200 00002"},
    {"username": "rohan", "name": "Rohan Mehta", "phone": "+91 98200 00003", "theme": Theme.LIGHT},
    {"username": "sneha", "name": "Sneha Gupta", "phone": "+91 98200 00004"},
    {"username": "vikram", "name": "Vikram Singh", "phone": "+91 98200 00005"},
    {"username": "ananya", "name": "Ananya Reddy", "phone": "+91 98200 00006", "theme": Theme.LIGHT},
]

# (driver index, origin, destination, seats, price, hours until expiry, parcel)
RIDES = [
    (0, "Kothrud", "Hinjewadi Phase 1", 3, 120, 6, False),
    (1, "Viman Nagar", "Pune Airport", 2, 80, 3, True),
    (2, "Baner", "Magarpatta", 4, 150, 12, False),
    (3, "Shivajinagar", "COEP Campus", 1, 40, 2, True),
    (4, "Hadapsar", "Kharadi EON IT Park", 3, 90, -1, False),
]

LOCATIONS = [
    ("Home", "Kothrud, Pune", LocationType.HOME),
    ("Office", "Hinjewadi Phase 1, Pune", LocationType.WORK),
    ("College", "COEP, Shivajinagar, Pune", LocationType.COLLEGE),
]


async def seed(stores: SqlStoreFactory):
    async with stores.session() as store:
        # Check if already seeded
        result = await store.session.execute(select(func.count()).select_from(UserModel))
        if result.scalar() > 0:
            print("Database already seeded. Skipping.")
            return

        users = UserService(store)
        rides = RideService(store)
        # No push dispatcher: seeded notifications are store-only.
        bookings = BookingService(store, rides, NotificationService(store))

        # ── Users ─────────────────────────────────────────────────────
        user_entities = []
        for u in USERS:
            user_entities.append(await users.register(password="seeded-secret", **u))
        print(f"  Created {len(user_entities)} users")

        # ── Favorite locations ────────────────────────────────────────
        for i, user in enumerate(user_entities):
            name, address, kind = LOCATIONS[i % len(LOCATIONS)]
            await users.add_favorite_location(user.id, name, address, kind)
        print(f"  Created {len(user_entities)} favorite locations")

        # ── Rides ─────────────────────────────────────────────────────
        now = utcnow()
        ride_entities = []
        for driver, origin, destination, seats, price, hours, parcel in RIDES:
            expires_at = now + timedelta(hours=hours)
            ride_entities.append(
                await rides.create_ride(
                    user_entities[driver].id,
                    origin=origin,
                    destination=destination,
                    date=expires_at.date().isoformat(),
                    time=expires_at.strftime("%H:%M"),
                    seats=seats,
                    price=price,
                    expires_at=expires_at,
                    accepts_parcel=parcel,
                    car_model="Maruti Swift",
                    car_number=f"MH12 AB {1000 + driver}",
                )
            )
        print(f"  Created {len(ride_entities)} rides")

        # ── Booking + notification ────────────────────────────────────
        rider = user_entities[5]
        await bookings.create_booking(
            rider.id, ride_entities[0].id, rider_name=rider.display_name
        )
        print("  Created 1 booking and 1 notification")

    print("\nSeed complete!")


async def main():
    print("Seeding database...")
    engine = build_engine(settings.database_url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await seed(SqlStoreFactory(build_session_factory(engine)))
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
