from __future__ import annotations

from fastapi import APIRouter

from dm_dashboard.api.deps import ControllerDep, UoWDep
from dm_dashboard.api.v1.schemas.ai_config import AIConfigSchema, AIConfigUpdateRequest
from dm_dashboard.services import ai_config_service

router = APIRouter(prefix="/api/v1/ai-config", tags=["ai-config"])


@router.get("", response_model=AIConfigSchema)
async def get_ai_config(controller: ControllerDep) -> AIConfigSchema:
    """The config the dashboard currently shows (default until first load)."""
    return AIConfigSchema.model_validate(controller.store.snapshot.ai_config)


@router.put("", response_model=AIConfigSchema)
async def update_ai_config(
    body: AIConfigUpdateRequest,
    uow: UoWDep,
    controller: ControllerDep,
) -> AIConfigSchema:
    config = await ai_config_service.update_ai_config(body.to_entity(), uow)
    controller.config_changed()
    return AIConfigSchema.model_validate(config)
