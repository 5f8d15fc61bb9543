from __future__ import annotations

from dm_dashboard.application.exceptions import FetchError, StoreWriteError
from dm_dashboard.application.uow import UnitOfWork
from dm_dashboard.domain.entities.ai_config import AIConfig
from dm_dashboard.domain.value_objects.enums import StreamName


async def read_ai_config(uow: UnitOfWork) -> AIConfig:
    config = await uow.ai_config.get()
    if config is None:
        raise FetchError(StreamName.CONFIG, "ai_config row is missing")
    return config


async def update_ai_config(config: AIConfig, uow: UnitOfWork) -> AIConfig:
    """Overwrite the singleton row. The caller signals config_changed afterwards."""
    try:
        await uow.ai_config_w.save(config)
        await uow.commit()
    except Exception as exc:
        await uow.rollback()
        raise StoreWriteError(f"could not save ai_config: {exc}") from exc
    return config
