from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class MessageResponse(BaseModel):
    id: str
    conversation_id: str
    message_text: str | None
    ai_response: str | None
    is_from_user: bool
    status: str
    created_at: datetime
    sender_name: str | None

    model_config = {"from_attributes": True}
