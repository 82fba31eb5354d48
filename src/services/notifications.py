"""
Notification fan-out.

Every notification is written to the entity store first (the source of
truth, including read state) and then handed to the push dispatcher as a
best-effort mirror for connected clients.  The hand-off waits for the
store's commit, so a rolled-back request never pushes.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Optional

from src.domain.clock import utcnow
from src.domain.entities import Notification
from src.domain.enums import NotificationKind
from src.workers.push_dispatcher import PushDispatcher

logger = logging.getLogger(__name__)


class NotificationService:
    def __init__(self, store, dispatcher: Optional[PushDispatcher] = None):
        self.store = store
        self.dispatcher = dispatcher

    async def notify(
        self,
        user_id: int,
        title: str,
        message: str,
        kind: NotificationKind,
        related_ride_id: Optional[int] = None,
        related_booking_id: Optional[int] = None,
    ) -> Notification:
        notification = await self.store.notifications.create(
            user_id=user_id,
            title=title,
            message=message,
            kind=kind,
            read=False,
            created_at=utcnow(),
            related_ride_id=related_ride_id,
            related_booking_id=related_booking_id,
        )
        logger.info(
            "Notification %d (%s) created for user %d",
            notification.id,
            kind.value,
            user_id,
        )
        if self.dispatcher is not None:
            # Only push what the store has made durable.
            self.store.after_commit(partial(self.dispatcher.submit, notification))
        return notification

    async def list_for_user(self, user_id: int) -> list[Notification]:
        return await self.store.notifications.list_by_user(user_id)

    async def mark_read(self, notification_id: int) -> None:
        """Set ``read``; a missing id or an already-read record is a no-op."""
        notification = await self.store.notifications.get_by_id(notification_id)
        if notification is None or notification.read:
            return
        await self.store.notifications.update(notification_id, read=True)
