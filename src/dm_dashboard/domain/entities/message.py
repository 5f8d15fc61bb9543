from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Message:
    id: str
    conversation_id: str
    message_text: str | None
    ai_response: str | None
    is_from_user: bool
    status: str
    created_at: datetime
    sender_name: str | None
