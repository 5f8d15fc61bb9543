"""Redis Pub/Sub change channel: publish side + per-collection subscriber tasks."""
from __future__ import annotations

import asyncio
import itertools
import logging
from dataclasses import dataclass, field

import redis.asyncio as aioredis
from redis.asyncio.client import PubSub
from redis.exceptions import RedisError

from dm_dashboard.application.exceptions import NotifyError
from dm_dashboard.application.ports.notifications import OnChangeCallback
from dm_dashboard.domain.entities.record_change import RecordChanged
from dm_dashboard.domain.value_objects.enums import Collection
from dm_dashboard.infrastructure.bus.serializer import deserialize_change, serialize_change

logger = logging.getLogger(__name__)

_handle_ids = itertools.count(1)


def channel_name(prefix: str, collection: Collection) -> str:
    return f"{prefix}.{collection.value}"


class RedisChangePublisher:
    """Producer side, used by the messaging pipeline and the seed script."""

    def __init__(self, redis: aioredis.Redis, prefix: str) -> None:
        self._redis = redis
        self._prefix = prefix

    async def publish(self, change: RecordChanged) -> None:
        await self._redis.publish(
            channel_name(self._prefix, change.collection),
            serialize_change(change),
        )


@dataclass(eq=False)
class RedisSubscription:
    collection: Collection
    channel: str
    pubsub: PubSub
    id: int = field(default_factory=lambda: next(_handle_ids))
    task: asyncio.Task[None] | None = None
    released: bool = False

    @property
    def active(self) -> bool:
        if self.released:
            return False
        return self.task is None or not self.task.done()


class RedisChangeChannel:
    """Implements application.ports.notifications.ChangeChannel."""

    def __init__(self, redis: aioredis.Redis, prefix: str) -> None:
        self._redis = redis
        self._prefix = prefix

    async def subscribe(
        self,
        collection: Collection,
        on_event: OnChangeCallback,
    ) -> RedisSubscription:
        channel = channel_name(self._prefix, collection)
        pubsub = self._redis.pubsub()
        try:
            await pubsub.subscribe(channel)
        except (RedisError, OSError) as exc:
            await pubsub.aclose()
            raise NotifyError(collection.value, str(exc)) from exc

        handle = RedisSubscription(collection=collection, channel=channel, pubsub=pubsub)
        handle.task = asyncio.create_task(
            self._listen(handle, on_event), name=f"redis-changes-{collection.value}",
        )
        logger.info("Subscribed to %s (handle=%d)", channel, handle.id)
        return handle

    async def unsubscribe(self, handle: RedisSubscription) -> None:
        if handle.released:
            return
        handle.released = True
        if handle.task:
            handle.task.cancel()
            try:
                await handle.task
            except asyncio.CancelledError:
                pass
        try:
            await handle.pubsub.unsubscribe(handle.channel)
        except (RedisError, OSError):
            logger.warning("Unsubscribe from %s failed, closing anyway", handle.channel)
        finally:
            await handle.pubsub.aclose()
        logger.info("Unsubscribed from %s (handle=%d)", handle.channel, handle.id)

    async def _listen(self, handle: RedisSubscription, on_event: OnChangeCallback) -> None:
        try:
            async for message in handle.pubsub.listen():
                if handle.released:
                    return
                if message["type"] != "message":
                    continue
                try:
                    change = deserialize_change(message["data"])
                except (ValueError, KeyError, TypeError):
                    logger.warning("Dropping malformed change on %s", handle.channel)
                    continue
                try:
                    await on_event(change)
                except Exception:
                    logger.exception("Error processing change on %s", handle.channel)
        except (RedisError, OSError):
            # connection loss is not an application error; push triggers stop here
            logger.warning("Change channel %s disconnected", handle.channel, exc_info=True)
