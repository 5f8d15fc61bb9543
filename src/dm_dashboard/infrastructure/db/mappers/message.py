from __future__ import annotations

from dm_dashboard.domain.entities.message import Message
from dm_dashboard.infrastructure.db.models.message import MessageModel


def model_to_entity(model: MessageModel) -> Message:
    return Message(
        id=str(model.id),
        conversation_id=str(model.conversation_id),
        message_text=model.message_text,
        ai_response=model.ai_response,
        is_from_user=model.is_from_user,
        status=model.status,
        created_at=model.created_at,
        sender_name=model.sender_name,
    )


def entity_to_model(entity: Message) -> MessageModel:
    return MessageModel(
        id=entity.id,
        conversation_id=entity.conversation_id,
        message_text=entity.message_text,
        ai_response=entity.ai_response,
        is_from_user=entity.is_from_user,
        status=entity.status,
        created_at=entity.created_at,
        sender_name=entity.sender_name,
    )
