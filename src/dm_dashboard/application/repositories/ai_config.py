from __future__ import annotations

from typing import Protocol

from dm_dashboard.domain.entities.ai_config import AIConfig


class AIConfigReader(Protocol):
    async def get(self) -> AIConfig | None:
        """Return the singleton row, or None when it has not been created."""
        ...


class AIConfigWriter(Protocol):
    async def save(self, config: AIConfig) -> None: ...
