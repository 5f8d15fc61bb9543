from __future__ import annotations

from typing import Protocol

from dm_dashboard.domain.entities.ai_config import AIConfig
from dm_dashboard.domain.entities.conversation import Conversation
from dm_dashboard.domain.entities.message import Message


class DataAccess(Protocol):
    """Read side of the remote store. Every method raises FetchError on failure."""

    async def list_conversations(self) -> list[Conversation]: ...

    async def list_messages(self, conversation_id: str) -> list[Message]: ...

    async def read_ai_config(self) -> AIConfig: ...
