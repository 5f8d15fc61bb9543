"""Shared test fixtures."""
from __future__ import annotations

import asyncio
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import pytest

from dm_dashboard.application.exceptions import FetchError, NotifyError
from dm_dashboard.application.ports.notifications import OnChangeCallback
from dm_dashboard.domain.entities.ai_config import AIConfig
from dm_dashboard.domain.entities.conversation import Conversation
from dm_dashboard.domain.entities.message import Message
from dm_dashboard.domain.entities.record_change import RecordChanged
from dm_dashboard.domain.value_objects.enums import (
    ChangeKind,
    Collection,
    MessageStatus,
    StreamName,
)
from dm_dashboard.services.reconciliation import ReconciliationController
from dm_dashboard.services.view_state import ViewStateStore


def ts(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def make_conversation(
    conversation_id: str | None = None,
    *,
    last_message_at: datetime | None = None,
    title: str = "@someone",
) -> Conversation:
    return Conversation(
        id=conversation_id or str(uuid.uuid4()),
        chat_id=f"ig-{uuid.uuid4().hex[:8]}",
        title=title,
        last_message_at=last_message_at,
        account_id=None,
    )


def make_message(
    message_id: str | None = None,
    *,
    conversation_id: str = "c1",
    created_at: datetime | None = None,
    text: str = "hello",
    is_from_user: bool = True,
) -> Message:
    return Message(
        id=message_id or str(uuid.uuid4()),
        conversation_id=conversation_id,
        message_text=text,
        ai_response=None,
        is_from_user=is_from_user,
        status=MessageStatus.PENDING,
        created_at=created_at or datetime.now(timezone.utc),
        sender_name=None,
    )


def message_change(conversation_id: str, kind: ChangeKind = ChangeKind.INSERT) -> RecordChanged:
    return RecordChanged(
        Collection.MESSAGES,
        kind,
        new={"id": str(uuid.uuid4()), "conversation_id": conversation_id},
    )


def conversation_change(kind: ChangeKind = ChangeKind.UPDATE) -> RecordChanged:
    return RecordChanged(Collection.CONVERSATIONS, kind, new={"id": str(uuid.uuid4())})


async def drain(rounds: int = 20) -> None:
    """Let pending tasks on the loop run to their next suspension point."""
    for _ in range(rounds):
        await asyncio.sleep(0)


@dataclass
class FakeConversationReader:
    _items: list[Conversation] = field(default_factory=list)
    error: Exception | None = None

    async def list_all(self) -> list[Conversation]:
        if self.error is not None:
            raise self.error
        return list(self._items)


@dataclass
class FakeMessageReader:
    _messages: list[Message] = field(default_factory=list)

    async def list_messages(self, conversation_id: str) -> list[Message]:
        return [m for m in self._messages if m.conversation_id == conversation_id]


@dataclass
class FakeAIConfigReader:
    _config: AIConfig | None = None

    async def get(self) -> AIConfig | None:
        return self._config


@dataclass
class FakeAIConfigWriter:
    _reader: FakeAIConfigReader
    error: Exception | None = None

    async def save(self, config: AIConfig) -> None:
        if self.error is not None:
            raise self.error
        self._reader._config = config


@dataclass
class FakeUoW:
    """In-memory UoW for unit tests."""
    conversations: FakeConversationReader = field(default_factory=FakeConversationReader)
    messages: FakeMessageReader = field(default_factory=FakeMessageReader)
    ai_config: FakeAIConfigReader = field(default_factory=FakeAIConfigReader)
    ai_config_w: FakeAIConfigWriter | None = None
    _committed: bool = False
    _rolled_back: bool = False

    def __post_init__(self) -> None:
        if self.ai_config_w is None:
            self.ai_config_w = FakeAIConfigWriter(self.ai_config)

    async def commit(self) -> None:
        self._committed = True

    async def rollback(self) -> None:
        self._rolled_back = True


def uow_factory(uow: FakeUoW):
    @asynccontextmanager
    async def _open() -> AsyncIterator[FakeUoW]:
        yield uow

    return _open


class ScriptedDataAccess:
    """DataAccess double whose reads can be held open and released in any order."""

    def __init__(self) -> None:
        self.conversations: list[Conversation] = []
        self.messages: dict[str, list[Message]] = {}
        self.config = AIConfig()
        self.failing: set[str] = set()
        self.calls: list[tuple[str, str | None]] = []
        self._gates: dict[str, asyncio.Future[None]] = {}

    def hold(self, key: str) -> None:
        self._gates[key] = asyncio.get_running_loop().create_future()

    def release(self, key: str) -> None:
        gate = self._gates.pop(key)
        gate.set_result(None)

    def calls_for(self, stream: str) -> list[tuple[str, str | None]]:
        return [c for c in self.calls if c[0] == stream]

    async def _pass(self, key: str, stream: StreamName) -> None:
        gate = self._gates.get(key)
        if gate is not None:
            await gate
        if key in self.failing or stream.value in self.failing:
            raise FetchError(stream, f"{key} unavailable")

    async def list_conversations(self) -> list[Conversation]:
        self.calls.append(("conversations", None))
        await self._pass("conversations", StreamName.CONVERSATIONS)
        return list(self.conversations)

    async def list_messages(self, conversation_id: str) -> list[Message]:
        self.calls.append(("messages", conversation_id))
        await self._pass(f"messages:{conversation_id}", StreamName.MESSAGES)
        return list(self.messages.get(conversation_id, []))

    async def read_ai_config(self) -> AIConfig:
        self.calls.append(("config", None))
        await self._pass("config", StreamName.CONFIG)
        return self.config


@dataclass(eq=False)
class FakeSubscription:
    collection: Collection
    callback: OnChangeCallback
    released: bool = False
    dropped: bool = False

    @property
    def active(self) -> bool:
        return not (self.released or self.dropped)


@dataclass
class FakeChangeChannel:
    failing: set[Collection] = field(default_factory=set)
    subscriptions: list[FakeSubscription] = field(default_factory=list)
    unsubscribe_calls: list[FakeSubscription] = field(default_factory=list)
    # suspend once inside subscribe, like a broker round trip
    yields: bool = False
    crashing: dict[Collection, BaseException] = field(default_factory=dict)

    async def subscribe(self, collection: Collection, on_event: OnChangeCallback) -> FakeSubscription:
        if self.yields:
            await asyncio.sleep(0)
        if collection in self.failing:
            raise NotifyError(collection.value, "broker unreachable")
        if collection in self.crashing:
            raise self.crashing[collection]
        sub = FakeSubscription(collection, on_event)
        self.subscriptions.append(sub)
        return sub

    async def unsubscribe(self, handle: FakeSubscription) -> None:
        self.unsubscribe_calls.append(handle)
        handle.released = True

    async def emit(self, change: RecordChanged) -> None:
        for sub in list(self.subscriptions):
            if sub.collection == change.collection and sub.active:
                await sub.callback(change)


@dataclass
class RecordingReporter:
    errors: list[FetchError] = field(default_factory=list)

    def report(self, error: FetchError) -> None:
        self.errors.append(error)


@dataclass
class Harness:
    store: ViewStateStore
    data: ScriptedDataAccess
    channel: FakeChangeChannel
    reporter: RecordingReporter
    controller: ReconciliationController


@pytest.fixture
def harness() -> Harness:
    store = ViewStateStore()
    data = ScriptedDataAccess()
    channel = FakeChangeChannel()
    reporter = RecordingReporter()
    controller = ReconciliationController(store, data, channel, reporter)
    return Harness(store, data, channel, reporter, controller)


def snapshot_ids(items: Any) -> list[str]:
    return [item.id for item in items]
