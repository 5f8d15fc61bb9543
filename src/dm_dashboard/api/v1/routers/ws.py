from __future__ import annotations

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from dm_dashboard.api.v1.schemas.dashboard import SnapshotResponse
from dm_dashboard.infrastructure.ws.manager import ConnectionManager
from dm_dashboard.infrastructure.ws.protocol import WsInbound, WsOutbound
from dm_dashboard.services.reconciliation import ReconciliationController

logger = logging.getLogger(__name__)
router = APIRouter(tags=["websocket"])


@router.websocket("/ws/dashboard")
async def ws_dashboard(websocket: WebSocket) -> None:
    manager: ConnectionManager = websocket.app.state.ws_manager
    controller: ReconciliationController = websocket.app.state.controller

    await manager.connect(websocket)
    try:
        snapshot = SnapshotResponse.from_snapshot(controller.store.snapshot)
        await websocket.send_text(
            WsOutbound(type="snapshot.updated", data=snapshot.model_dump(mode="json")).model_dump_json()
        )
        await _read_loop(websocket, controller)
    except WebSocketDisconnect:
        pass
    except Exception:
        logger.exception("WS error")
    finally:
        manager.disconnect(websocket)


async def _read_loop(ws: WebSocket, controller: ReconciliationController) -> None:
    while True:
        raw = await ws.receive_text()
        try:
            msg = WsInbound.model_validate_json(raw)
        except ValidationError:
            await ws.send_text(
                WsOutbound(type="error", data={"code": "invalid_payload"}).model_dump_json()
            )
            continue

        if msg.type == "ping":
            await ws.send_text(WsOutbound(type="pong", data={}).model_dump_json())

        elif msg.type == "select":
            conversation_id = msg.data.get("conversation_id")
            controller.select_conversation(None if conversation_id is None else str(conversation_id))

        elif msg.type == "config_changed":
            controller.config_changed()

        else:
            await ws.send_text(
                WsOutbound(type="error", data={"code": "unknown_type", "type": msg.type}).model_dump_json()
            )
