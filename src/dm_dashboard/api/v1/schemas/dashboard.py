from __future__ import annotations

from pydantic import BaseModel

from dm_dashboard.api.v1.schemas.ai_config import AIConfigSchema
from dm_dashboard.api.v1.schemas.conversation import ConversationResponse
from dm_dashboard.api.v1.schemas.message import MessageResponse
from dm_dashboard.services.view_state import ViewSnapshot


class SnapshotResponse(BaseModel):
    conversations: list[ConversationResponse]
    selected_id: str | None
    messages: list[MessageResponse]
    ai_config: AIConfigSchema

    @classmethod
    def from_snapshot(cls, snapshot: ViewSnapshot) -> SnapshotResponse:
        return cls.model_validate(snapshot, from_attributes=True)


class DashboardResponse(BaseModel):
    snapshot: SnapshotResponse
    streams: dict[str, str]
    subscribed: list[str]
    viewers: int = 0


class SelectionRequest(BaseModel):
    conversation_id: str | None = None


class ResubscribeResponse(BaseModel):
    subscribed: list[str]
