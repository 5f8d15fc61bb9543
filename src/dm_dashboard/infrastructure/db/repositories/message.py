from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from dm_dashboard.domain.entities.message import Message
from dm_dashboard.infrastructure.db.mappers import message as mapper
from dm_dashboard.infrastructure.db.models.conversation import ConversationModel
from dm_dashboard.infrastructure.db.models.message import MessageModel


class MessageReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_messages(self, conversation_id: str) -> list[Message]:
        stmt = (
            select(MessageModel)
            .where(MessageModel.conversation_id == conversation_id)
            .order_by(MessageModel.created_at.asc(), MessageModel.id.asc())
        )
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]


class MessageWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, message: Message) -> Message:
        """Insert a message and bump its conversation's last activity."""
        model = mapper.entity_to_model(message)
        self._session.add(model)
        await self._session.flush()
        await self._session.execute(
            update(ConversationModel)
            .where(ConversationModel.id == message.conversation_id)
            .values(last_message_at=message.created_at)
        )
        return mapper.model_to_entity(model)
