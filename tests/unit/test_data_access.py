from __future__ import annotations

import pytest

from dm_dashboard.application.exceptions import FetchError
from dm_dashboard.domain.entities.ai_config import AIConfig
from dm_dashboard.domain.value_objects.enums import StreamName
from dm_dashboard.services.data_access import StoreReader
from tests.conftest import FakeUoW, make_conversation, make_message, snapshot_ids, ts, uow_factory


@pytest.mark.asyncio
async def test_list_conversations_is_ordered_by_activity():
    uow = FakeUoW()
    uow.conversations._items = [
        make_conversation("c1", last_message_at=ts("2024-01-02T00:00:00Z")),
        make_conversation("c2", last_message_at=None),
        make_conversation("c3", last_message_at=ts("2024-01-03T00:00:00Z")),
    ]
    reader = StoreReader(uow_factory(uow))

    result = await reader.list_conversations()

    assert snapshot_ids(result) == ["c3", "c1", "c2"]


@pytest.mark.asyncio
async def test_list_messages_scoped_and_ascending():
    uow = FakeUoW()
    uow.messages._messages = [
        make_message("m2", conversation_id="c1", created_at=ts("2024-01-01T00:00:02Z")),
        make_message("x1", conversation_id="c2", created_at=ts("2024-01-01T00:00:00Z")),
        make_message("m1", conversation_id="c1", created_at=ts("2024-01-01T00:00:01Z")),
    ]
    reader = StoreReader(uow_factory(uow))

    result = await reader.list_messages("c1")

    assert snapshot_ids(result) == ["m1", "m2"]


@pytest.mark.asyncio
async def test_store_failure_becomes_fetch_error():
    uow = FakeUoW()
    uow.conversations.error = ConnectionResetError("connection reset by peer")
    reader = StoreReader(uow_factory(uow))

    with pytest.raises(FetchError) as exc_info:
        await reader.list_conversations()

    assert exc_info.value.stream == StreamName.CONVERSATIONS
    assert isinstance(exc_info.value.__cause__, ConnectionResetError)
    assert "connection reset" in exc_info.value.detail


@pytest.mark.asyncio
async def test_missing_config_row_is_fetch_error():
    reader = StoreReader(uow_factory(FakeUoW()))

    with pytest.raises(FetchError) as exc_info:
        await reader.read_ai_config()

    assert exc_info.value.stream == StreamName.CONFIG


@pytest.mark.asyncio
async def test_read_ai_config_returns_stored_row():
    uow = FakeUoW()
    stored = AIConfig(auto_respond=True, system_prompt="Be brief.")
    uow.ai_config._config = stored
    reader = StoreReader(uow_factory(uow))

    assert await reader.read_ai_config() == stored
