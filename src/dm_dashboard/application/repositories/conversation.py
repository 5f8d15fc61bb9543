from __future__ import annotations

from typing import Protocol

from dm_dashboard.domain.entities.conversation import Conversation


class ConversationReader(Protocol):
    async def list_all(self) -> list[Conversation]:
        """All conversations, most recently active first."""
        ...
