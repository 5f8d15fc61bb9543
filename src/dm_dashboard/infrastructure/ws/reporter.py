from __future__ import annotations

import logging

from dm_dashboard.application.exceptions import FetchError
from dm_dashboard.infrastructure.ws.manager import ConnectionManager

logger = logging.getLogger(__name__)


class WsErrorReporter:
    """Implements application.ports.errors.ErrorReporter as a toast over WS."""

    def __init__(self, manager: ConnectionManager) -> None:
        self._manager = manager

    def report(self, error: FetchError) -> None:
        logger.warning("Fetch failed (stream=%s): %s", error.stream, error.detail)
        self._manager.publish(
            "error",
            {"code": "fetch_failed", "stream": str(error.stream), "detail": error.detail},
        )
