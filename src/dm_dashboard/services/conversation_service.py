from __future__ import annotations

from dm_dashboard.application.policies.ordering import order_conversations
from dm_dashboard.application.uow import UnitOfWork
from dm_dashboard.domain.entities.conversation import Conversation


async def list_conversations(uow: UnitOfWork) -> list[Conversation]:
    """All conversations, most recently active first, inactive ones last."""
    conversations = await uow.conversations.list_all()
    return order_conversations(conversations)
