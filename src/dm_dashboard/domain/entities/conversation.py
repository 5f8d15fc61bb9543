from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Conversation:
    id: str
    chat_id: str
    title: str
    last_message_at: datetime | None
    account_id: str | None
