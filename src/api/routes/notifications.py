"""
Notification endpoints
======================

GET   /api/v1/notifications                   -- own notifications, newest first
PATCH /api/v1/notifications/{id}/read         -- mark one as read (idempotent)
WS    /api/v1/notifications/live              -- push snapshots from Redis
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import aclosing

from fastapi import APIRouter, Depends, Response, WebSocket, WebSocketDisconnect, status

from src.api.auth import get_current_user, resolve_user
from src.api.dependencies import get_notification_service
from src.api.schemas import NotificationResponse
from src.domain.entities import User
from src.domain.exceptions import TransportError
from src.services.notifications import NotificationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get(
    "",
    response_model=list[NotificationResponse],
    summary="List notifications",
)
async def list_notifications(
    user: User = Depends(get_current_user),
    notifications: NotificationService = Depends(get_notification_service),
):
    return await notifications.list_for_user(user.id)


@router.patch(
    "/{notification_id}/read",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Mark a notification as read",
)
async def mark_notification_read(
    notification_id: int,
    user: User = Depends(get_current_user),
    notifications: NotificationService = Depends(get_notification_service),
):
    await notifications.mark_read(notification_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


async def _forward_snapshots(websocket: WebSocket, channel, user_id: int) -> None:
    async with aclosing(channel.watch(user_id)) as snapshots:
        async for snapshot in snapshots:
            await websocket.send_json(snapshot)


async def _wait_for_disconnect(websocket: WebSocket) -> None:
    while True:
        message = await websocket.receive()
        if message["type"] == "websocket.disconnect":
            return


@router.websocket("/live")
async def live_notifications(websocket: WebSocket):
    """Stream the user's full push set on connect and after every change.

    Clients treat each frame as a hint to refetch ``GET /notifications``;
    read state in these frames is always ``false``.  The subscription is
    released as soon as the client goes away.
    """
    state = websocket.app.state
    async with state.stores.session() as store:
        user = await resolve_user(store, websocket.headers.get(state.settings.auth_header))

    if user is None or state.push_channel is None:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    forward = asyncio.create_task(
        _forward_snapshots(websocket, state.push_channel, user.id)
    )
    disconnect = asyncio.create_task(_wait_for_disconnect(websocket))
    try:
        await asyncio.wait({forward, disconnect}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for task in (forward, disconnect):
            task.cancel()
        await asyncio.gather(forward, disconnect, return_exceptions=True)

    if disconnect.done() and not disconnect.cancelled():
        logger.debug("Live notifications client for user %d disconnected", user.id)
        return

    try:
        forward.result()
    except asyncio.CancelledError:
        return
    except WebSocketDisconnect:
        logger.debug("Live notifications client for user %d disconnected", user.id)
        return
    except TransportError:
        logger.warning(
            "Live notifications for user %d lost the push channel",
            user.id,
            exc_info=True,
        )
        await websocket.close(code=status.WS_1011_INTERNAL_ERROR)
        return
    await websocket.close()
