"""
Redis-backed push channel.

Mirrors notifications into a keyed publish/subscribe store so connected
clients get low-latency updates.  Layout per recipient:

* ``HSET <prefix>:<user_id> <push_id> <json>`` -- one independently keyed,
  append-only child per published record.
* ``PUBLISH <prefix>:<user_id> <push_id>`` -- change announcement.

Subscribers re-read the whole hash on every announcement, so they always
receive the full current set rather than a delta.

The channel is a delivery hint only.  Read state is owned by the entity
store; the ``read`` flag published here is never updated.
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any, AsyncIterator

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from src.domain.entities import Notification
from src.domain.exceptions import TransportError

logger = logging.getLogger(__name__)


def to_push_record(notification: Notification) -> dict[str, Any]:
    """Serialise a stored notification into the shape published to clients."""
    return {
        "notification_id": notification.id,
        "user_id": notification.user_id,
        "title": notification.title,
        "message": notification.message,
        "kind": notification.kind.value,
        "related_ride_id": notification.related_ride_id,
        "related_booking_id": notification.related_booking_id,
        "read": False,
        "created_at": notification.created_at.isoformat()
        if notification.created_at
        else None,
    }


class RedisPushChannel:
    def __init__(self, client: aioredis.Redis, prefix: str = "notifications"):
        self.redis = client
        self.prefix = prefix

    def _key(self, user_id: int) -> str:
        return f"{self.prefix}:{user_id}"

    async def publish(self, user_id: int, record: dict[str, Any]) -> str:
        """Append *record* under the user's key.  Returns the push id."""
        push_id = uuid.uuid4().hex
        payload = json.dumps({**record, "id": push_id})
        key = self._key(user_id)
        try:
            await self.redis.hset(key, push_id, payload)
            await self.redis.publish(key, push_id)
        except RedisError as exc:
            raise TransportError(
                f"Push publish failed for user {user_id}",
                details={"key": key},
            ) from exc
        return push_id

    async def snapshot(self, user_id: int) -> list[dict[str, Any]]:
        """Full current set for *user_id*, newest first."""
        key = self._key(user_id)
        try:
            raw = await self.redis.hgetall(key)
        except RedisError as exc:
            raise TransportError(
                f"Push snapshot failed for user {user_id}",
                details={"key": key},
            ) from exc
        records = [json.loads(value) for value in raw.values()]
        records.sort(key=lambda r: r.get("created_at") or "", reverse=True)
        return records

    async def watch(self, user_id: int) -> AsyncIterator[list[dict[str, Any]]]:
        """Yield the full set on subscribe and again after every change.

        Callers should close the iterator (``contextlib.aclosing``) so the
        subscription is released as soon as they stop listening.
        """
        key = self._key(user_id)
        pubsub = self.redis.pubsub()
        try:
            await pubsub.subscribe(key)
            yield await self.snapshot(user_id)
            async for message in pubsub.listen():
                if message.get("type") != "message":
                    continue
                yield await self.snapshot(user_id)
        except RedisError as exc:
            raise TransportError(
                f"Push subscription failed for user {user_id}",
                details={"key": key},
            ) from exc
        finally:
            try:
                await pubsub.unsubscribe(key)
            except RedisError:
                logger.warning("Could not unsubscribe from %s", key, exc_info=True)
            await pubsub.aclose()
            logger.debug("Stopped watching %s", key)

    async def close(self) -> None:
        await self.redis.aclose()
