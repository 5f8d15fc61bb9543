from __future__ import annotations

from fastapi import APIRouter, status

from dm_dashboard.api.deps import ControllerDep, ManagerDep
from dm_dashboard.api.v1.schemas.dashboard import (
    DashboardResponse,
    ResubscribeResponse,
    SelectionRequest,
    SnapshotResponse,
)

router = APIRouter(prefix="/api/v1/dashboard", tags=["dashboard"])


def _dashboard(controller: ControllerDep, manager: ManagerDep) -> DashboardResponse:
    return DashboardResponse(
        snapshot=SnapshotResponse.from_snapshot(controller.store.snapshot),
        streams={name: state.value for name, state in controller.stream_states().items()},
        subscribed=[c.value for c in controller.subscribed()],
        viewers=manager.connection_count,
    )


@router.get("", response_model=DashboardResponse)
async def get_dashboard(controller: ControllerDep, manager: ManagerDep) -> DashboardResponse:
    return _dashboard(controller, manager)


@router.put("/selection", response_model=DashboardResponse)
async def select_conversation(
    body: SelectionRequest,
    controller: ControllerDep,
    manager: ManagerDep,
) -> DashboardResponse:
    """Change the selection; messages arrive later over the websocket."""
    controller.select_conversation(body.conversation_id)
    return _dashboard(controller, manager)


@router.post("/config-changed", status_code=status.HTTP_202_ACCEPTED)
async def config_changed(controller: ControllerDep) -> dict[str, str]:
    controller.config_changed()
    return {"status": "accepted"}


@router.post("/resubscribe", response_model=ResubscribeResponse)
async def resubscribe(controller: ControllerDep) -> ResubscribeResponse:
    active = await controller.resubscribe()
    return ResubscribeResponse(subscribed=[c.value for c in active])
