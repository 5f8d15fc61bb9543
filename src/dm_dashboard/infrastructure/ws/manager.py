"""In-process WebSocket connection manager for dashboard viewers."""
from __future__ import annotations

import asyncio
import logging
from typing import Any

from fastapi import WebSocket

from dm_dashboard.infrastructure.ws.protocol import WsOutbound

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Tracks connected dashboards and fans events out to all of them."""

    def __init__(self) -> None:
        self._connections: set[WebSocket] = set()
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    async def connect(self, ws: WebSocket) -> None:
        await ws.accept()
        self._connections.add(ws)
        logger.debug("WS connected (total=%d)", len(self._connections))

    def disconnect(self, ws: WebSocket) -> None:
        self._connections.discard(ws)
        logger.debug("WS disconnected (total=%d)", len(self._connections))

    async def broadcast(self, event_type: str, data: dict[str, Any]) -> None:
        raw = WsOutbound(type=event_type, data=data).model_dump_json()
        dead: list[WebSocket] = []
        for ws in list(self._connections):
            try:
                await ws.send_text(raw)
            except Exception:
                dead.append(ws)
        for ws in dead:
            self.disconnect(ws)

    def publish(self, event_type: str, data: dict[str, Any]) -> None:
        """Schedule a broadcast from synchronous code running on the event loop."""
        if not self._connections:
            return
        task = asyncio.get_running_loop().create_task(self.broadcast(event_type, data))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
