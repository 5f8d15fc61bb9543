from __future__ import annotations

from dm_dashboard.domain.entities.ai_config import DEFAULT_AI_CONFIG, AIConfig
from dm_dashboard.infrastructure.db.models.ai_config import SINGLETON_ID, AIConfigModel


def missing_fields(model: AIConfigModel) -> list[str]:
    return [
        name for name in ("auto_welcome", "welcome_message")
        if getattr(model, name) is None
    ]


def model_to_entity(model: AIConfigModel) -> AIConfig:
    return AIConfig(
        auto_respond=model.auto_respond,
        system_prompt=model.system_prompt,
        auto_welcome=(
            model.auto_welcome
            if model.auto_welcome is not None
            else DEFAULT_AI_CONFIG.auto_welcome
        ),
        welcome_message=(
            model.welcome_message
            if model.welcome_message is not None
            else DEFAULT_AI_CONFIG.welcome_message
        ),
    )


def entity_to_values(entity: AIConfig) -> dict[str, object]:
    return {
        "id": SINGLETON_ID,
        "auto_respond": entity.auto_respond,
        "system_prompt": entity.system_prompt,
        "auto_welcome": entity.auto_welcome,
        "welcome_message": entity.welcome_message,
    }
