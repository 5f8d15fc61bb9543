"""Reconciliation controller: decides what to (re)fetch and when to apply it.

Three independent streams (conversations, messages, config) each run at most
one fetch at a time. Triggers that arrive while a fetch is in flight collapse
into a single follow-up fetch. Every fetch is tagged with the generation of
its stream when issued; results from an older generation are discarded, which
is how a superseded selection loses to the newer one.
"""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from types import TracebackType
from typing import Self

from dm_dashboard.application.exceptions import FetchError, NotifyError
from dm_dashboard.application.ports.data_access import DataAccess
from dm_dashboard.application.ports.errors import ErrorReporter, LoggingErrorReporter
from dm_dashboard.application.ports.notifications import (
    ChangeChannel,
    OnChangeCallback,
    SubscriptionHandle,
)
from dm_dashboard.domain.entities.record_change import RecordChanged
from dm_dashboard.domain.value_objects.enums import Collection, StreamName, StreamState
from dm_dashboard.services.view_state import ViewStateStore

logger = logging.getLogger(__name__)

FetchFn = Callable[[int], Awaitable[None]]


class RefetchStream:
    """Fetch scheduling for one stream: coalescing plus a generation counter."""

    def __init__(
        self,
        name: StreamName,
        fetch: FetchFn,
        initial_state: StreamState = StreamState.IDLE,
    ) -> None:
        self.name = name
        self.state = initial_state
        self.generation = 0
        self._fetch = fetch
        self._task: asyncio.Task[None] | None = None
        self._task_generation = -1
        self._rerun = False
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def in_flight(self) -> bool:
        return (
            self._task is not None
            and not self._task.done()
            and self._task_generation == self.generation
        )

    def is_current(self, generation: int) -> bool:
        return generation == self.generation

    def trigger(self) -> asyncio.Task[None]:
        """Fetch now, or queue one more fetch if one is already running."""
        if self.in_flight:
            self._rerun = True
            return self._task  # type: ignore[return-value]
        return self._spawn()

    def restart(self) -> asyncio.Task[None]:
        """Supersede whatever is in flight and fetch again."""
        self.invalidate()
        return self._spawn()

    def invalidate(self) -> None:
        self.generation += 1
        self._rerun = False

    async def cancel(self) -> None:
        self.invalidate()
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._task = None

    def _spawn(self) -> asyncio.Task[None]:
        self._rerun = False
        self.state = StreamState.LOADING
        self._task_generation = self.generation
        task = asyncio.create_task(
            self._run(self.generation), name=f"refetch-{self.name}-{self.generation}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        self._task = task
        return task

    async def _run(self, generation: int) -> None:
        while True:
            await self._fetch(generation)
            if generation != self.generation or not self._rerun:
                return
            self._rerun = False


class ReconciliationController:
    def __init__(
        self,
        store: ViewStateStore,
        data: DataAccess,
        channel: ChangeChannel,
        reporter: ErrorReporter | None = None,
    ) -> None:
        self._store = store
        self._data = data
        self._channel = channel
        self._reporter = reporter or LoggingErrorReporter()
        self._handles: dict[Collection, SubscriptionHandle] = {}
        self._subscribe_lock = asyncio.Lock()
        self._started = False
        self._closed = False

        self._conversations = RefetchStream(StreamName.CONVERSATIONS, self._load_conversations)
        self._messages = RefetchStream(
            StreamName.MESSAGES, self._load_messages, initial_state=StreamState.EMPTY,
        )
        self._config = RefetchStream(StreamName.CONFIG, self._load_config)

    @property
    def store(self) -> ViewStateStore:
        return self._store

    @property
    def closed(self) -> bool:
        return self._closed

    def stream_states(self) -> dict[str, StreamState]:
        return {
            s.name.value: s.state
            for s in (self._conversations, self._messages, self._config)
        }

    def subscribed(self) -> list[Collection]:
        return [c for c, h in self._handles.items() if h.active]

    async def start(self) -> None:
        """Subscribe to both collections and issue the initial loads."""
        if self._started:
            return
        self._started = True
        try:
            await self._subscribe_missing()
        except BaseException:
            await self.stop()
            raise
        self._conversations.trigger()
        self._config.trigger()

    async def stop(self) -> None:
        """Release subscriptions exactly once and make pending results inert."""
        if self._closed:
            return
        self._closed = True
        async with self._subscribe_lock:
            handles = list(self._handles.values())
            self._handles.clear()
            for handle in handles:
                try:
                    await self._channel.unsubscribe(handle)
                except Exception:
                    logger.exception("Failed to release %s subscription", handle.collection)
        for stream in (self._conversations, self._messages, self._config):
            await stream.cancel()
        logger.info("Reconciliation controller stopped")

    async def __aenter__(self) -> Self:
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.stop()

    async def resubscribe(self) -> list[Collection]:
        """Retry subscriptions that failed or dropped. Returns the active ones."""
        if not self._closed:
            await self._subscribe_missing()
        return self.subscribed()

    def select_conversation(self, conversation_id: str | None) -> asyncio.Task[None] | None:
        if self._closed:
            logger.debug("Ignoring selection after stop")
            return None
        if conversation_id is None:
            self._messages.invalidate()
            self._messages.state = StreamState.EMPTY
            self._store.clear_selection()
            return None
        if conversation_id == self._store.selected_id:
            return self._messages.trigger()
        self._store.select(conversation_id)
        return self._messages.restart()

    def config_changed(self) -> asyncio.Task[None] | None:
        if self._closed:
            return None
        return self._config.trigger()

    async def _on_conversation_change(self, change: RecordChanged) -> None:
        if self._closed:
            return
        logger.debug("Conversation %s notified, refetching list", change.kind)
        self._conversations.trigger()

    async def _on_message_change(self, change: RecordChanged) -> None:
        if self._closed:
            return
        selected = self._store.selected_id
        if selected is None or change.conversation_ref != selected:
            return
        logger.debug("Message %s notified for %s, refetching", change.kind, selected)
        self._messages.trigger()

    async def _subscribe_missing(self) -> None:
        callbacks: dict[Collection, OnChangeCallback] = {
            Collection.CONVERSATIONS: self._on_conversation_change,
            Collection.MESSAGES: self._on_message_change,
        }
        # stop() takes the same lock, so a handle is either stored before
        # teardown releases it or released here after teardown started.
        async with self._subscribe_lock:
            for collection, callback in callbacks.items():
                if self._closed:
                    return
                existing = self._handles.get(collection)
                if existing is not None:
                    if existing.active:
                        continue
                    del self._handles[collection]
                    await self._channel.unsubscribe(existing)
                try:
                    handle = await self._channel.subscribe(collection, callback)
                except NotifyError as exc:
                    logger.warning(
                        "No live updates for %s: %s", exc.collection, exc.detail,
                    )
                    continue
                if self._closed:
                    await self._channel.unsubscribe(handle)
                    return
                self._handles[collection] = handle

    def _accepts(self, stream: RefetchStream, generation: int) -> bool:
        return not self._closed and stream.is_current(generation)

    async def _load_conversations(self, generation: int) -> None:
        stream = self._conversations
        if not self._accepts(stream, generation):
            return
        stream.state = StreamState.LOADING
        try:
            conversations = await self._data.list_conversations()
        except FetchError as exc:
            if self._accepts(stream, generation):
                stream.state = StreamState.FAILED
                self._reporter.report(exc)
            return
        if not self._accepts(stream, generation):
            return
        self._store.replace_conversations(conversations)
        stream.state = StreamState.LOADED

    async def _load_messages(self, generation: int) -> None:
        stream = self._messages
        target = self._store.selected_id
        if target is None or not self._accepts(stream, generation):
            return
        stream.state = StreamState.LOADING
        try:
            messages = await self._data.list_messages(target)
        except FetchError as exc:
            if self._accepts(stream, generation) and self._store.selected_id == target:
                stream.state = StreamState.FAILED
                self._reporter.report(exc)
            return
        if not self._accepts(stream, generation) or self._store.selected_id != target:
            logger.debug("Discarding stale messages for %s", target)
            return
        self._store.replace_messages(messages)
        stream.state = StreamState.LOADED

    async def _load_config(self, generation: int) -> None:
        stream = self._config
        if not self._accepts(stream, generation):
            return
        stream.state = StreamState.LOADING
        try:
            config = await self._data.read_ai_config()
        except FetchError as exc:
            if self._accepts(stream, generation):
                stream.state = StreamState.FAILED
            # the loaded (or default) config stays in place
            logger.warning("AI config refresh failed: %s", exc.detail)
            return
        if not self._accepts(stream, generation):
            return
        self._store.replace_ai_config(config)
        stream.state = StreamState.LOADED
