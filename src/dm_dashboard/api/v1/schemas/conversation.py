from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class ConversationResponse(BaseModel):
    id: str
    chat_id: str
    title: str
    last_message_at: datetime | None
    account_id: str | None

    model_config = {"from_attributes": True}
