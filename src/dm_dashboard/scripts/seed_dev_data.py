"""Seed development data: sample DM threads, messages and the ai_config row.

Publishes the matching change events so a running dashboard refreshes.
"""
from __future__ import annotations

import asyncio
import logging
import uuid
from datetime import datetime, timedelta, timezone

import redis.asyncio as aioredis

from dm_dashboard.config import settings
from dm_dashboard.domain.entities.ai_config import DEFAULT_AI_CONFIG
from dm_dashboard.domain.entities.conversation import Conversation
from dm_dashboard.domain.entities.message import Message
from dm_dashboard.domain.entities.record_change import RecordChanged
from dm_dashboard.domain.value_objects.enums import ChangeKind, Collection, MessageStatus
from dm_dashboard.infrastructure.bus.redis_pubsub import RedisChangePublisher
from dm_dashboard.infrastructure.db.uow import open_uow

logger = logging.getLogger(__name__)

_THREADS: list[tuple[str, list[tuple[bool, str, str | None]]]] = [
    (
        "@coffee.lover",
        [
            (True, "Hi! Are you open on Sundays?", None),
            (False, "Hi! Are you open on Sundays?", "Yes, we're open 9am to 4pm on Sundays."),
        ],
    ),
    (
        "@maria_travels",
        [
            (True, "Do you ship to Portugal?", None),
        ],
    ),
]


async def seed() -> None:
    redis = aioredis.from_url(settings.REDIS_URL, decode_responses=True)
    publisher = RedisChangePublisher(redis, settings.REDIS_CHANGES_PREFIX)
    changes: list[RecordChanged] = []

    try:
        async with open_uow() as uow:
            start = datetime.now(timezone.utc) - timedelta(hours=1)
            await uow.ai_config_w.save(DEFAULT_AI_CONFIG)

            for index, (handle, lines) in enumerate(_THREADS):
                conv = await uow.conversations_w.create(
                    Conversation(
                        id=str(uuid.uuid4()),
                        chat_id=f"ig-thread-{uuid.uuid4().hex[:12]}",
                        title=handle,
                        last_message_at=None,
                        account_id=None,
                    )
                )
                changes.append(
                    RecordChanged(Collection.CONVERSATIONS, ChangeKind.INSERT, new={"id": conv.id})
                )
                for offset, (from_user, text, reply) in enumerate(lines):
                    msg = await uow.messages_w.create(
                        Message(
                            id=str(uuid.uuid4()),
                            conversation_id=conv.id,
                            message_text=text,
                            ai_response=reply,
                            is_from_user=from_user,
                            status=MessageStatus.SENT if reply else MessageStatus.PENDING,
                            created_at=start + timedelta(minutes=10 * index + offset),
                            sender_name=handle if from_user else None,
                        )
                    )
                    changes.append(
                        RecordChanged(
                            Collection.MESSAGES,
                            ChangeKind.INSERT,
                            new={"id": msg.id, "conversation_id": conv.id},
                        )
                    )

            await uow.commit()

        for change in changes:
            await publisher.publish(change)
        logger.info("Seeded %d threads, published %d changes", len(_THREADS), len(changes))
    finally:
        await redis.aclose()


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    asyncio.run(seed())


if __name__ == "__main__":
    main()
