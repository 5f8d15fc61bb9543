from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from dm_dashboard.application.exceptions import FetchError
from dm_dashboard.application.uow import UnitOfWork, UoWFactory
from dm_dashboard.domain.entities.ai_config import AIConfig
from dm_dashboard.domain.entities.conversation import Conversation
from dm_dashboard.domain.entities.message import Message
from dm_dashboard.domain.value_objects.enums import StreamName
from dm_dashboard.services import ai_config_service, conversation_service, message_service

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StoreReader:
    """Implements application.ports.data_access.DataAccess.

    Opens a fresh unit of work per read so a failed read never poisons the next one.
    """

    def __init__(self, uow_factory: UoWFactory) -> None:
        self._uow_factory = uow_factory

    async def list_conversations(self) -> list[Conversation]:
        return await self._read(StreamName.CONVERSATIONS, conversation_service.list_conversations)

    async def list_messages(self, conversation_id: str) -> list[Message]:
        async def _query(uow: UnitOfWork) -> list[Message]:
            return await message_service.list_messages(conversation_id, uow)

        return await self._read(StreamName.MESSAGES, _query)

    async def read_ai_config(self) -> AIConfig:
        return await self._read(StreamName.CONFIG, ai_config_service.read_ai_config)

    async def _read(
        self,
        stream: StreamName,
        query: Callable[[UnitOfWork], Awaitable[T]],
    ) -> T:
        try:
            async with self._uow_factory() as uow:
                return await query(uow)
        except FetchError:
            raise
        except Exception as exc:
            logger.debug("Read failed for %s", stream, exc_info=True)
            raise FetchError(stream, f"{type(exc).__name__}: {exc}") from exc
