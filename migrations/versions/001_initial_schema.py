"""Initial schema: users, rides, bookings, favorite locations, notifications.

Revision ID: 001
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # ── users ─────────────────────────────────────────────────────────
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(120), unique=True, nullable=False),
        sa.Column("password", sa.Text, nullable=False),
        sa.Column("name", sa.String(120), nullable=True),
        sa.Column("phone", sa.String(32), nullable=True),
        sa.Column(
            "theme",
            sa.Enum("LIGHT", "DARK", name="theme"),
            server_default="DARK",
        ),
        sa.Column("profile_image", sa.Text, nullable=True),
    )

    # ── rides ─────────────────────────────────────────────────────────
    op.create_table(
        "rides",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "driver_id", sa.Integer, sa.ForeignKey("users.id"), nullable=False
        ),
        sa.Column("from_location", sa.Text, nullable=False),
        sa.Column("to_location", sa.Text, nullable=False),
        sa.Column("date", sa.String(32), nullable=False),
        sa.Column("time", sa.String(32), nullable=False),
        sa.Column("seats", sa.Integer, nullable=False),
        sa.Column("price", sa.Integer, nullable=False),
        sa.Column(
            "available", sa.Boolean, server_default=sa.true(), nullable=False
        ),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("accepts_parcel", sa.Boolean, server_default=sa.false()),
        sa.Column("car_model", sa.String(120), nullable=True),
        sa.Column("car_number", sa.String(32), nullable=True),
        sa.Column("comments", sa.Text, nullable=True),
    )
    op.create_index("idx_rides_driver", "rides", ["driver_id"])
    op.create_index("idx_rides_available", "rides", ["available"])

    # ── bookings ──────────────────────────────────────────────────────
    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "ride_id", sa.Integer, sa.ForeignKey("rides.id"), nullable=False
        ),
        sa.Column(
            "user_id", sa.Integer, sa.ForeignKey("users.id"), nullable=False
        ),
        sa.Column(
            "status",
            sa.Enum("PENDING", "ACCEPTED", "REJECTED", name="bookingstatus"),
            server_default="PENDING",
            nullable=False,
        ),
        sa.Column("is_parcel", sa.Boolean, server_default=sa.false()),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("idx_bookings_user", "bookings", ["user_id"])
    op.create_index("idx_bookings_ride", "bookings", ["ride_id"])

    # ── favorite_locations ────────────────────────────────────────────
    op.create_table(
        "favorite_locations",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "user_id", sa.Integer, sa.ForeignKey("users.id"), nullable=False
        ),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("address", sa.Text, nullable=False),
        sa.Column(
            "type",
            sa.Enum("HOME", "WORK", "COLLEGE", name="locationtype"),
            nullable=False,
        ),
    )
    op.create_index(
        "idx_favorite_locations_user", "favorite_locations", ["user_id"]
    )

    # ── notifications ─────────────────────────────────────────────────
    op.create_table(
        "notifications",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "user_id", sa.Integer, sa.ForeignKey("users.id"), nullable=False
        ),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("message", sa.Text, nullable=False),
        sa.Column(
            "type",
            sa.Enum(
                "RIDE_REQUEST", "RIDE_RESPONSE", "SYSTEM", name="notificationkind"
            ),
            nullable=False,
        ),
        sa.Column("read", sa.Boolean, server_default=sa.false(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "related_ride_id", sa.Integer, sa.ForeignKey("rides.id"), nullable=True
        ),
        sa.Column(
            "related_booking_id",
            sa.Integer,
            sa.ForeignKey("bookings.id"),
            nullable=True,
        ),
    )
    op.create_index("idx_notifications_user", "notifications", ["user_id"])


def downgrade() -> None:
    op.drop_table("notifications")
    op.drop_table("favorite_locations")
    op.drop_table("bookings")
    op.drop_table("rides")
    op.drop_table("users")
    op.execute("DROP TYPE IF EXISTS notificationkind")
    op.execute("DROP TYPE IF EXISTS locationtype")
    op.execute("DROP TYPE IF EXISTS bookingstatus")
    op.execute("DROP TYPE IF EXISTS theme")
