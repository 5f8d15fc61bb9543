from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import Callable, Protocol

from dm_dashboard.application.repositories.ai_config import (
    AIConfigReader,
    AIConfigWriter,
)
from dm_dashboard.application.repositories.conversation import ConversationReader
from dm_dashboard.application.repositories.message import MessageReader


class UnitOfWork(Protocol):
    conversations: ConversationReader
    messages: MessageReader
    ai_config: AIConfigReader
    ai_config_w: AIConfigWriter

    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...


UoWFactory = Callable[[], AbstractAsyncContextManager[UnitOfWork]]
