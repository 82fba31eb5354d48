"""
Background Push Dispatcher
==========================

Publishes notification records to the push channel without holding up the
request that produced them.

* ``submit`` schedules one ``asyncio`` task per record and returns at once.
* Failures are logged and dropped: no retries, nothing reaches the caller.
* ``drain`` awaits everything still in flight (used on app shutdown and in
  tests).
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol

from src.domain.entities import Notification
from src.domain.exceptions import TransportError
from src.infrastructure.push import to_push_record

logger = logging.getLogger(__name__)


class PushChannel(Protocol):
    async def publish(self, user_id: int, record: dict[str, Any]) -> str: ...


class PushDispatcher:
    def __init__(self, channel: PushChannel):
        self.channel = channel
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def submit(self, notification: Notification) -> None:
        record = to_push_record(notification)
        task = asyncio.create_task(self._publish(notification.user_id, record))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def drain(self) -> None:
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def _publish(self, user_id: int, record: dict[str, Any]) -> None:
        try:
            await self.channel.publish(user_id, record)
        except TransportError:
            logger.warning(
                "Push publish dropped for user %s (notification %s)",
                user_id,
                record.get("notification_id"),
                exc_info=True,
            )
        except Exception:
            logger.exception("Unhandled error publishing push for user %s", user_id)
