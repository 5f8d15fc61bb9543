from __future__ import annotations

from pydantic import BaseModel, Field

from dm_dashboard.domain.entities.ai_config import AIConfig


class AIConfigSchema(BaseModel):
    auto_respond: bool
    system_prompt: str
    auto_welcome: bool
    welcome_message: str

    model_config = {"from_attributes": True}


class AIConfigUpdateRequest(AIConfigSchema):
    system_prompt: str = Field(min_length=1, max_length=8000)
    welcome_message: str = Field(max_length=1000)

    def to_entity(self) -> AIConfig:
        return AIConfig(
            auto_respond=self.auto_respond,
            system_prompt=self.system_prompt,
            auto_welcome=self.auto_welcome,
            welcome_message=self.welcome_message,
        )
