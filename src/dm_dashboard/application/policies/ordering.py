"""Display order for conversations and messages."""
from __future__ import annotations

from collections.abc import Iterable

from dm_dashboard.domain.entities.conversation import Conversation
from dm_dashboard.domain.entities.message import Message


def order_conversations(conversations: Iterable[Conversation]) -> list[Conversation]:
    """Most recent activity first; conversations without activity go last."""
    items = list(conversations)
    dated = [c for c in items if c.last_message_at is not None]
    undated = [c for c in items if c.last_message_at is None]
    # two stable passes: id ascending within equal timestamps
    dated.sort(key=lambda c: c.id)
    dated.sort(key=lambda c: c.last_message_at, reverse=True)  # type: ignore[arg-type,return-value]
    undated.sort(key=lambda c: c.id)
    return dated + undated


def order_messages(messages: Iterable[Message]) -> list[Message]:
    return sorted(messages, key=lambda m: (m.created_at, m.id))
