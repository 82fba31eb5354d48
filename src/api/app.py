"""
FastAPI application factory.

* Registers routes for users, rides, bookings, notifications and admin.
* Builds the entity store and the push dispatcher in the lifespan and
  drains outstanding pushes on shutdown.
* Maps domain errors to HTTP responses.
* Swagger / OpenAPI UI available at ``/docs``.
"""

from contextlib import asynccontextmanager
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.api.routes import admin, bookings, notifications, rides, users
from src.config import Settings, settings as default_settings
from src.domain.exceptions import (
    ConflictError,
    InvalidStatusTransition,
    NotFoundError,
    RideShareError,
)
from src.infrastructure.memory_store import MemoryStore
from src.workers.push_dispatcher import PushDispatcher

logger = logging.getLogger(__name__)

ERROR_STATUS: dict[type, int] = {
    NotFoundError: 404,
    ConflictError: 409,
    InvalidStatusTransition: 409,
}


def build_store_factory(settings: Settings):
    if settings.store_backend == "sql":
        from src.infrastructure.database import build_engine, build_session_factory
        from src.infrastructure.sql_store import SqlStoreFactory

        engine = build_engine(settings.database_url)
        return SqlStoreFactory(build_session_factory(engine)), engine
    return MemoryStore(), None


def build_push_channel(settings: Settings):
    if not settings.push_enabled:
        return None
    from src.infrastructure.push import RedisPushChannel
    from src.infrastructure.redis_client import create_redis

    return RedisPushChannel(create_redis(settings.redis_url), settings.push_key_prefix)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Wire the store and push channel on startup; drain pushes on shutdown."""
    settings = app.state.settings
    app.state.stores, engine = build_store_factory(settings)
    app.state.push_channel = build_push_channel(settings)
    app.state.dispatcher = (
        PushDispatcher(app.state.push_channel) if app.state.push_channel else None
    )
    logger.info(
        "Started with %s store, push %s",
        settings.store_backend,
        "enabled" if app.state.dispatcher else "disabled",
    )
    yield
    if app.state.dispatcher is not None:
        await app.state.dispatcher.drain()
    if app.state.push_channel is not None:
        await app.state.push_channel.close()
    if engine is not None:
        await engine.dispose()


async def _domain_error_handler(request: Request, exc: RideShareError) -> JSONResponse:
    status_code = next(
        (code for cls, code in ERROR_STATUS.items() if isinstance(exc, cls)), 400
    )
    return JSONResponse(status_code=status_code, content=exc.to_dict())


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    logging.basicConfig(level=settings.log_level)

    app = FastAPI(
        title="Ride Sharing Marketplace API",
        description=(
            "Drivers post ride offers, riders book seats, drivers accept or "
            "reject bookings, and both sides are notified through a polled "
            "feed and a live push channel."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_exception_handler(RideShareError, _domain_error_handler)

    # Routers
    app.include_router(users.router, prefix="/api/v1")
    app.include_router(rides.router, prefix="/api/v1")
    app.include_router(bookings.router, prefix="/api/v1")
    app.include_router(notifications.router, prefix="/api/v1")
    app.include_router(admin.router, prefix="/api/v1")

    return app
