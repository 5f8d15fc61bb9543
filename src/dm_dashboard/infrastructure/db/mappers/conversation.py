from __future__ import annotations

from dm_dashboard.domain.entities.conversation import Conversation
from dm_dashboard.infrastructure.db.models.conversation import ConversationModel


def model_to_entity(model: ConversationModel) -> Conversation:
    return Conversation(
        id=str(model.id),
        chat_id=model.chat_id,
        title=model.title,
        last_message_at=model.last_message_at,
        account_id=model.account_id,
    )


def entity_to_model(entity: Conversation) -> ConversationModel:
    return ConversationModel(
        id=entity.id,
        chat_id=entity.chat_id,
        title=entity.title,
        last_message_at=entity.last_message_at,
        account_id=entity.account_id,
    )
