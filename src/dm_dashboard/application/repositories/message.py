from __future__ import annotations

from typing import Protocol

from dm_dashboard.domain.entities.message import Message


class MessageReader(Protocol):
    async def list_messages(self, conversation_id: str) -> list[Message]: ...
