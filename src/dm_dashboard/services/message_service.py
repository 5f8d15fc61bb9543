from __future__ import annotations

from dm_dashboard.application.policies.ordering import order_messages
from dm_dashboard.application.uow import UnitOfWork
from dm_dashboard.domain.entities.message import Message


async def list_messages(conversation_id: str, uow: UnitOfWork) -> list[Message]:
    messages = await uow.messages.list_messages(conversation_id)
    return order_messages(messages)
