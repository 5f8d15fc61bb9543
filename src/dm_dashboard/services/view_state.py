"""View state store: the single in-memory copy of what the dashboard shows."""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace

from dm_dashboard.domain.entities.ai_config import DEFAULT_AI_CONFIG, AIConfig
from dm_dashboard.domain.entities.conversation import Conversation
from dm_dashboard.domain.entities.message import Message

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ViewSnapshot:
    conversations: tuple[Conversation, ...] = ()
    selected_id: str | None = None
    messages: tuple[Message, ...] = ()
    ai_config: AIConfig = DEFAULT_AI_CONFIG


SnapshotListener = Callable[[ViewSnapshot], None]


class ViewStateStore:
    """Holds a frozen snapshot; each write swaps in a new one.

    Fields are only ever replaced whole. Listeners run synchronously after
    every change, in registration order.
    """

    def __init__(self, initial: ViewSnapshot | None = None) -> None:
        self._snapshot = initial or ViewSnapshot()
        self._listeners: list[SnapshotListener] = []

    @property
    def snapshot(self) -> ViewSnapshot:
        return self._snapshot

    @property
    def selected_id(self) -> str | None:
        return self._snapshot.selected_id

    def add_listener(self, listener: SnapshotListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def replace_conversations(self, conversations: Iterable[Conversation]) -> None:
        self._commit(replace(self._snapshot, conversations=tuple(conversations)))

    def replace_messages(self, messages: Iterable[Message]) -> None:
        self._commit(replace(self._snapshot, messages=tuple(messages)))

    def replace_ai_config(self, config: AIConfig) -> None:
        self._commit(replace(self._snapshot, ai_config=config))

    def select(self, conversation_id: str) -> None:
        """Point the selection at a conversation; messages of the old one are dropped."""
        if conversation_id == self._snapshot.selected_id:
            return
        self._commit(replace(self._snapshot, selected_id=conversation_id, messages=()))

    def clear_selection(self) -> None:
        self._commit(replace(self._snapshot, selected_id=None, messages=()))

    def _commit(self, snapshot: ViewSnapshot) -> None:
        if snapshot == self._snapshot:
            return
        self._snapshot = snapshot
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("View state listener failed")
