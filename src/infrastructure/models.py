"""
SQLAlchemy ORM models for the relational store.

Tables
------
* ``users``               -- marketplace members (drivers and riders alike)
* ``rides``               -- ride offers posted by drivers
* ``bookings``            -- a rider's request for a seat on a ride
* ``favorite_locations``  -- saved addresses per user
* ``notifications``       -- durable notification feed

Attribute names match the fields of the dataclasses in
``src.domain.entities`` so ``SqlRepository`` can copy values across
one-to-one.

Indexes
-------
* **B-Tree** on the owner columns (``driver_id``, ``user_id``) and on
  ``rides.available`` for the listing queries.
"""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)

from .database import Base
from src.domain.enums import BookingStatus, LocationType, NotificationKind, Theme


class UserModel(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(120), unique=True, nullable=False)
    password = Column(Text, nullable=False)
    name = Column(String(120), nullable=True)
    phone = Column(String(32), nullable=True)
    theme = Column(Enum(Theme), default=Theme.DARK)
    profile_image = Column(Text, nullable=True)


class RideModel(Base):
    __tablename__ = "rides"

    id = Column(Integer, primary_key=True, autoincrement=True)
    driver_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    origin = Column("from_location", Text, nullable=False)
    destination = Column("to_location", Text, nullable=False)
    date = Column(String(32), nullable=False)
    time = Column(String(32), nullable=False)
    seats = Column(Integer, nullable=False)
    price = Column(Integer, nullable=False)
    available = Column(Boolean, default=True, nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    accepts_parcel = Column(Boolean, default=False)
    car_model = Column(String(120), nullable=True)
    car_number = Column(String(32), nullable=True)
    comments = Column(Text, nullable=True)

    __table_args__ = (
        Index("idx_rides_driver", "driver_id"),
        Index("idx_rides_available", "available"),
    )


class BookingModel(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    ride_id = Column(Integer, ForeignKey("rides.id"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    status = Column(
        Enum(BookingStatus), default=BookingStatus.PENDING, nullable=False
    )
    is_parcel = Column(Boolean, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("idx_bookings_user", "user_id"),
        Index("idx_bookings_ride", "ride_id"),
    )


class FavoriteLocationModel(Base):
    __tablename__ = "favorite_locations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    name = Column(String(120), nullable=False)
    address = Column(Text, nullable=False)
    type = Column(Enum(LocationType), nullable=False)

    __table_args__ = (Index("idx_favorite_locations_user", "user_id"),)


class NotificationModel(Base):
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    kind = Column("type", Enum(NotificationKind), nullable=False)
    read = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    related_ride_id = Column(Integer, ForeignKey("rides.id"), nullable=True)
    related_booking_id = Column(Integer, ForeignKey("bookings.id"), nullable=True)

    __table_args__ = (Index("idx_notifications_user", "user_id"),)
