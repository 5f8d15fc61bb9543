from __future__ import annotations

from contextlib import asynccontextmanager
from types import TracebackType
from typing import AsyncIterator, Self

from sqlalchemy.ext.asyncio import AsyncSession

from dm_dashboard.infrastructure.db.repositories.ai_config import (
    AIConfigReaderRepo,
    AIConfigWriterRepo,
)
from dm_dashboard.infrastructure.db.repositories.conversation import (
    ConversationReaderRepo,
    ConversationWriterRepo,
)
from dm_dashboard.infrastructure.db.repositories.message import (
    MessageReaderRepo,
    MessageWriterRepo,
)
from dm_dashboard.infrastructure.db.session import AsyncSessionLocal


class SqlAlchemyUoW:
    """Unit of work over one AsyncSession.

    Refetches only read, so anything not explicitly committed is rolled back
    on exit and the connection goes straight back to the pool.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._committed = False
        self.conversations = ConversationReaderRepo(session)
        self.messages = MessageReaderRepo(session)
        self.ai_config = AIConfigReaderRepo(session)
        self.ai_config_w = AIConfigWriterRepo(session)
        # seed script only
        self.conversations_w = ConversationWriterRepo(session)
        self.messages_w = MessageWriterRepo(session)

    async def commit(self) -> None:
        await self._session.commit()
        self._committed = True

    async def rollback(self) -> None:
        await self._session.rollback()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_type is not None or not self._committed:
            if self._session.in_transaction():
                await self.rollback()


@asynccontextmanager
async def open_uow() -> AsyncIterator[SqlAlchemyUoW]:
    async with AsyncSessionLocal() as session, SqlAlchemyUoW(session) as uow:
        yield uow
