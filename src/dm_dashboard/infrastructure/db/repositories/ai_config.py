from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from dm_dashboard.domain.entities.ai_config import AIConfig
from dm_dashboard.infrastructure.db.mappers import ai_config as mapper
from dm_dashboard.infrastructure.db.models.ai_config import AIConfigModel

logger = logging.getLogger(__name__)


class AIConfigReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self) -> AIConfig | None:
        stmt = select(AIConfigModel).limit(1)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None
        missing = mapper.missing_fields(model)
        if missing:
            logger.warning(
                "ai_config row lacks %s, using built-in defaults", ", ".join(missing),
            )
        return mapper.model_to_entity(model)


class AIConfigWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def save(self, config: AIConfig) -> None:
        values = mapper.entity_to_values(config)
        stmt = (
            pg_insert(AIConfigModel)
            .values(**values)
            .on_conflict_do_update(
                index_elements=[AIConfigModel.id],
                set_={
                    **{k: v for k, v in values.items() if k != "id"},
                    "updated_at": func.now(),
                },
            )
        )
        await self._session.execute(stmt)
